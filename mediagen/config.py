# mediagen/config.py
import os
from typing import List, Optional
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class Settings(BaseModel):
    openai_api_key: Optional[str] = None
    openai_base_url: Optional[str] = None
    image_model: str = "gpt-image-1"
    video_model: str = "sora-2"
    # read/write budget for one model call; the call is aborted once it runs out
    llm_timeout_seconds: float = 600.0
    redis_url: Optional[str] = None
    job_ttl_seconds: int = 86400
    cors_allow_origins: List[str] = Field(default_factory=list)
    debug: bool = False

    @classmethod
    def from_env(cls, env_file: str = ".env") -> "Settings":
        """
        Load `env_file` (if present) into the process environment, then read settings.
        Variables already set in the environment are never overridden by the file.
        """
        load_dotenv(env_file, override=False)
        origins = os.getenv("CORS_ALLOW_ORIGIN") or ""
        return cls(
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_base_url=os.getenv("OPENAI_BASE_URL") or None,
            image_model=os.getenv("IMAGE_MODEL") or "gpt-image-1",
            video_model=os.getenv("VIDEO_MODEL") or "sora-2",
            llm_timeout_seconds=float(os.getenv("LLM_TIMEOUT_SECONDS", "600")),
            redis_url=os.getenv("REDIS_URL") or None,
            job_ttl_seconds=int(os.getenv("JOB_TTL_SECONDS", "86400")),
            cors_allow_origins=[o.strip() for o in origins.split(",") if o.strip()],
            debug=os.getenv("DEBUG", "0").lower() in ("1", "true", "yes"),
        )
