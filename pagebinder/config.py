"""Configuration management for the PDF merge/split service."""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class AssemblyConfig:
    """Configuration for merge and split operations."""
    paper_size: str = field(
        default_factory=lambda: os.environ.get("CANVAS_PAPER_SIZE", "a4")
    )
    max_merge_files: int = field(
        default_factory=lambda: int(os.environ.get("MAX_MERGE_FILES", "3"))
    )
    max_file_size_mb: int = field(
        default_factory=lambda: int(os.environ.get("MAX_FILE_SIZE_MB", "100"))
    )
    max_page_number: int = field(
        default_factory=lambda: int(os.environ.get("MAX_PAGE_NUMBER", "10000"))
    )
    merge_filename: str = "merged.pdf"
    split_filename: str = "splitted.pdf"


@dataclass
class ServerConfig:
    """Configuration for HTTP server."""
    host: str = field(
        default_factory=lambda: os.environ.get("HTTP_HOST", "0.0.0.0")
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("HTTP_PORT", "8089"))
    )


@dataclass
class Config:
    """Main configuration container."""
    assembly: AssemblyConfig = field(default_factory=AssemblyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Force reload of configuration from environment."""
    global _config
    _config = Config()
    return _config
