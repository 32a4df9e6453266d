"""Configuration management."""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    # Network generation
    sphere_radius: float = Field(default=1.5, gt=0, description="Sphere radius")
    point_count: int = Field(default=12, gt=0, description="Number of network points")
    curve_segments: int = Field(default=15, ge=1, description="Segments per geodesic curve")
    patch_subdivision: int = Field(default=16, ge=1, description="Patch barycentric grid resolution")
    sampling_mode: str = Field(default="fibonacci", description="Point sampling mode (fibonacci, random)")
    patch_style: str = Field(default="curved", description="Patch style (curved, flat)")

    # Animation
    rotation_step: float = Field(default=0.002, description="Rotation per frame in radians")

    # API
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8000, description="API port")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Logging format (plain, json)")

    class Config:
        env_prefix = "GEODESIC_"
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
