# stockdesk/schemas/common.py
from pydantic import BaseModel, ConfigDict


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# Records handed out by repositories are snapshots: read-only once built
class RecordBase(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)
