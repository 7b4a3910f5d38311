"""Request/response documents exchanged with the optimization service."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OptimizationJob(BaseModel):
    id: int = Field(..., ge=1, description="Opaque job id, unique within one request.")
    location: List[float] = Field(..., min_length=2, max_length=2, description="[longitude, latitude]")


class OptimizationVehicle(BaseModel):
    id: int = 1
    start: List[float] = Field(..., min_length=2, max_length=2, description="[longitude, latitude]")
    return_to_depot: bool = True
    profile: str = "driving-car"


class OptimizationRequest(BaseModel):
    vehicles: List[OptimizationVehicle]
    jobs: List[OptimizationJob]


class OptimizationStep(BaseModel):
    model_config = ConfigDict(extra="ignore")

    type: Optional[str] = None
    job: Optional[int] = None
    location: Optional[List[float]] = None


class OptimizationRoute(BaseModel):
    model_config = ConfigDict(extra="ignore")

    vehicle: Optional[int] = None
    steps: List[OptimizationStep] = Field(default_factory=list)


class OptimizationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: Optional[int] = None
    routes: List[OptimizationRoute] = Field(default_factory=list)

    def job_steps(self) -> list[OptimizationStep]:
        """Steps of the first route that visit a job, in visiting order."""
        if not self.routes:
            return []
        return [step for step in self.routes[0].steps if step.job is not None]
