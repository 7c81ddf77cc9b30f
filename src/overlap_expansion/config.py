import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


class ExpansionSettings(BaseModel):
    """Default strategy parameters used when building named variants."""
    
    # Run limits
    max_iterations: Optional[int] = Field(10_000, ge=1)
    total_nodes: Optional[int] = Field(None, ge=0)
    
    # Strategy parameters
    threshold: float = Field(0.1, gt=0, le=1)
    sphere_max_distance: Optional[int] = Field(None, ge=0)
    coverage_fraction: float = Field(0.1, gt=0, le=1)
    truncated_max_radius: Optional[int] = Field(3, ge=0)
    truncated_max_nodes: Optional[int] = Field(None, ge=1)
    salience_top_k: int = Field(50, ge=1)
    
    log_level: str = "INFO"
    
    @classmethod
    def from_env(cls) -> "ExpansionSettings":
        """Create settings from environment variables."""
        return cls(
            max_iterations=_optional_int("OVERLAP_MAX_ITERATIONS") if "OVERLAP_MAX_ITERATIONS" in os.environ else 10_000,
            total_nodes=_optional_int("OVERLAP_TOTAL_NODES"),
            threshold=float(os.getenv("OVERLAP_THRESHOLD", "0.1")),
            sphere_max_distance=_optional_int("OVERLAP_SPHERE_MAX_DISTANCE"),
            coverage_fraction=float(os.getenv("OVERLAP_COVERAGE_FRACTION", "0.1")),
            truncated_max_radius=_optional_int("OVERLAP_TRUNCATED_MAX_RADIUS") if "OVERLAP_TRUNCATED_MAX_RADIUS" in os.environ else 3,
            truncated_max_nodes=_optional_int("OVERLAP_TRUNCATED_MAX_NODES"),
            salience_top_k=int(os.getenv("OVERLAP_SALIENCE_TOP_K", "50")),
            log_level=os.getenv("OVERLAP_LOG_LEVEL", "INFO"),
        )
