"""Configuration management for Code Context using Pydantic Settings."""

from pathlib import Path
from typing import List, Optional
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_EXCLUDED_DIRS = [
    "node_modules", ".git", ".svn", "dist", "build",
    "target", ".vscode", ".idea", "__pycache__"
]


class ContextConfig(BaseModel):
    """Context analysis and caching configuration."""
    max_depth: int = Field(default=5, ge=0, description="Maximum directory depth walked during project analysis")
    excluded_dirs: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRS),
        description="Directory names skipped during project analysis"
    )
    max_cache_size: int = Field(default=100, gt=0, description="Maximum number of cached context snapshots")
    cache_max_age: float = Field(default=300.0, gt=0, description="Seconds a cached snapshot stays fresh")
    history_limit: int = Field(default=50, gt=0, description="Editor history snapshots retained")
    completion_window_lines: int = Field(default=10, gt=0, description="Lines kept on each side of the cursor")
    fallback_tail_lines: int = Field(default=50, gt=0, description="Trailing lines used when no cursor is known")
    max_related_files: int = Field(default=5, ge=0, description="Maximum related files in explanation contexts")


class AIConfig(BaseModel):
    """AI service configuration used by the readiness probe."""
    model: str = Field(default="gemini-2.0-flash-001", description="AI model to use")
    api_key: Optional[str] = Field(default=None, description="API key for the AI service")
    use_vertexai: bool = Field(default=False, description="Use Vertex AI instead of Gemini Developer API")
    vertexai_project: Optional[str] = Field(default=None, description="Google Cloud Project ID for Vertex AI")
    vertexai_location: Optional[str] = Field(default="us-central1", description="Vertex AI location")


class UIConfig(BaseModel):
    """UI configuration."""
    show_debug_info: bool = Field(default=False, description="Show debug information")
    use_colors: bool = Field(default=True, description="Use colors in output")
    log_level: str = Field(default="WARNING", description="Log level for the code_context logger")


class Config(BaseSettings):
    """Main configuration class using Pydantic Settings."""

    # Nested configurations
    context: ContextConfig = Field(default_factory=ContextConfig)
    ai: AIConfig = Field(default_factory=AIConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    # Environment variable configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore"
    )

    # Direct environment mappings for common settings
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    google_api_key: Optional[str] = Field(default=None, alias="GOOGLE_API_KEY")
    code_context_model: Optional[str] = Field(default=None, alias="CODE_CONTEXT_MODEL")
    code_context_max_depth: Optional[int] = Field(default=None, alias="CODE_CONTEXT_MAX_DEPTH")
    code_context_cache_size: Optional[int] = Field(default=None, alias="CODE_CONTEXT_CACHE_SIZE")
    code_context_cache_max_age: Optional[float] = Field(default=None, alias="CODE_CONTEXT_CACHE_MAX_AGE")
    code_context_history_limit: Optional[int] = Field(default=None, alias="CODE_CONTEXT_HISTORY_LIMIT")
    code_context_debug: Optional[bool] = Field(default=None, alias="CODE_CONTEXT_DEBUG")
    code_context_log_level: Optional[str] = Field(default=None, alias="CODE_CONTEXT_LOG_LEVEL")
    no_color: Optional[bool] = Field(default=None, alias="NO_COLOR")

    # Vertex AI environment mappings
    google_genai_use_vertexai: Optional[bool] = Field(default=None, alias="GOOGLE_GENAI_USE_VERTEXAI")
    google_cloud_project: Optional[str] = Field(default=None, alias="GOOGLE_CLOUD_PROJECT")
    google_cloud_location: Optional[str] = Field(default=None, alias="GOOGLE_CLOUD_LOCATION")

    def model_post_init(self, __context) -> None:
        """Apply environment variable overrides after model initialization."""
        # Apply API key (prefer GEMINI_API_KEY over GOOGLE_API_KEY)
        if self.gemini_api_key:
            self.ai.api_key = self.gemini_api_key
        elif self.google_api_key:
            self.ai.api_key = self.google_api_key

        if self.code_context_model:
            self.ai.model = self.code_context_model

        # Apply Vertex AI settings
        if self.google_genai_use_vertexai is not None:
            self.ai.use_vertexai = self.google_genai_use_vertexai
        if self.google_cloud_project:
            self.ai.vertexai_project = self.google_cloud_project
        if self.google_cloud_location:
            self.ai.vertexai_location = self.google_cloud_location

        # Apply context settings
        if self.code_context_max_depth is not None:
            self.context.max_depth = self.code_context_max_depth
        if self.code_context_cache_size is not None:
            self.context.max_cache_size = self.code_context_cache_size
        if self.code_context_cache_max_age is not None:
            self.context.cache_max_age = self.code_context_cache_max_age
        if self.code_context_history_limit is not None:
            self.context.history_limit = self.code_context_history_limit

        # Apply UI settings
        if self.code_context_debug is not None:
            self.ui.show_debug_info = self.code_context_debug
        if self.code_context_log_level:
            self.ui.log_level = self.code_context_log_level.upper()
        if self.no_color is not None:
            self.ui.use_colors = not self.no_color


class ConfigManager:
    """Manage configuration loading and sample environment files."""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.home() / ".config" / "code-context"

    def load_config(self) -> Config:
        """Load configuration using Pydantic Settings."""
        # Pydantic Settings automatically loads .env files
        return Config()

    def create_sample_env(self, project_specific: bool = False) -> Path:
        """Create a sample .env file and return its path."""
        sample_env_content = """# Code Context Configuration
# AI readiness (Gemini Developer API)
GEMINI_API_KEY=your_api_key_here
# or GOOGLE_API_KEY=your_api_key_here

# For Vertex AI:
# GOOGLE_GENAI_USE_VERTEXAI=true
# GOOGLE_CLOUD_PROJECT=your-project-id
# GOOGLE_CLOUD_LOCATION=us-central1

# Project analysis and cache
CODE_CONTEXT_MAX_DEPTH=5
CODE_CONTEXT_CACHE_SIZE=100
CODE_CONTEXT_CACHE_MAX_AGE=300
CODE_CONTEXT_HISTORY_LIMIT=50

# Or use nested format for context settings:
# CONTEXT__COMPLETION_WINDOW_LINES=10
# CONTEXT__FALLBACK_TAIL_LINES=50
# CONTEXT__MAX_RELATED_FILES=5
# CONTEXT__EXCLUDED_DIRS='["node_modules", ".git", "dist"]'

# UI Settings
CODE_CONTEXT_DEBUG=false
CODE_CONTEXT_LOG_LEVEL=WARNING
NO_COLOR=false
"""

        target_file = Path.cwd() / ".env" if project_specific else self.config_dir / ".env"
        target_file.parent.mkdir(parents=True, exist_ok=True)

        with open(target_file, 'w') as f:
            f.write(sample_env_content)

        return target_file


def load_config() -> Config:
    """Load configuration from the environment and .env files."""
    return ConfigManager().load_config()


def create_sample_env(project_specific: bool = False, config_dir: Optional[Path] = None) -> Path:
    """Create a sample .env file."""
    return ConfigManager(config_dir).create_sample_env(project_specific)
