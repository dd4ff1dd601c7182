"""
account_service package

This package contains the core backend logic for the account service.
It includes:

- FastAPI application and error translation (`main.py`)
- Account service orchestration (`service.py`)
- Credential store over SQLAlchemy (`store.py`, `models.py`, `db.py`)
- Password hashing (`hashing.py`) and JWT issuing/verification (`tokens.py`)
- Settings (`config.py`) and pydantic schemas (`schemas.py`)

Used as the entry point for the account microservice in the platform.
"""
