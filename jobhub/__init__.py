"""
JobHub Backend.

Core components:
- api: FastAPI app, routers, auth dependencies
- services: Accounts, jobs and the application lifecycle
- db: SQLAlchemy models and session management
- storage: Uploaded document files
"""
