"""MediaRoom: feed assembly and social interaction engine."""
