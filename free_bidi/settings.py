from __future__ import annotations

from typing import List, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .storage.shadow import SHADOW_DIR_NAME, SUPPORTED_EXTENSIONS


class FreeBidiSettings(BaseSettings):
    """Runtime configuration for the free-bidi host shell."""

    model_config = SettingsConfigDict(env_prefix="FREEBIDI_", extra="ignore")

    # Encoding
    rtl_encoding: str = Field(default="")  # empty means the built-in default (ISO-8859-8)
    fallback_encodings: List[str] = Field(default_factory=list)

    # Shadow files
    shadow_dir_name: str = Field(default=SHADOW_DIR_NAME)
    extensions: List[str] = Field(default_factory=lambda: list(SUPPORTED_EXTENSIONS))

    def candidate_names(self, override: Optional[str] = None) -> List[Optional[str]]:
        """Encoding names to try, in order; `override` replaces the primary name."""
        primary = override if override is not None else self.rtl_encoding
        return [primary, *self.fallback_encodings]


def load_settings(**overrides) -> FreeBidiSettings:
    """Load settings from the environment, reading the nearest .env from the working directory first."""
    load_dotenv(find_dotenv(usecwd=True))
    return FreeBidiSettings(**overrides)
