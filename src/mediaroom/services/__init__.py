"""Service layer: each module takes an explicit SQLAlchemy session."""
