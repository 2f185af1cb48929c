"""Demo data schemas."""
from pydantic import BaseModel


class DemoDataStatus(BaseModel):
    """Whether the demo data flag is set."""
    loaded: bool


class DemoDataLoadResult(BaseModel):
    """Result of a load request; ``created`` is False if it was loaded before."""
    created: bool
