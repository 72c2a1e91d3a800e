# File: clipwork/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. The job ledger model inherits from this.
Base = declarative_base()
