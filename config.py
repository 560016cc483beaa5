"""
Configuration settings for the LAN File Browser
"""

import os
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # API Configuration
    app_name: str = "LAN File Browser"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server Configuration
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"

    # Served directory
    root_dir: str = "."
    confine_to_root: bool = True  # Reject paths that resolve outside root_dir

    # Authentication
    users: str = "admin:password"  # user1:pass1,user2:pass2
    auth_required: bool = True
    session_cookie_name: str = "auth"
    session_cookie_value: str = "secret"

    @property
    def root_path(self) -> str:
        return os.path.abspath(self.root_dir)

    class Config:
        env_file = ".env"
        case_sensitive = False

# Global settings instance
settings = Settings()

def validate_settings(config: Settings = settings):
    """Validate that the server can start with the given settings"""
    errors = []

    if not os.path.exists(config.root_path):
        errors.append(f"ROOT_DIR does not exist: {config.root_dir}")
    elif not os.path.isdir(config.root_path):
        errors.append(f"ROOT_DIR is not a directory: {config.root_dir}")

    if not 0 < config.port < 65536:
        errors.append(f"PORT must be between 1 and 65535, got {config.port}")

    if not config.session_cookie_name:
        errors.append("SESSION_COOKIE_NAME is required")

    if not config.session_cookie_value:
        errors.append("SESSION_COOKIE_VALUE is required")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
