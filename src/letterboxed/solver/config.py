"""Letter Boxed solver configuration."""

from dotenv import find_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Letter Boxed solver."""

    max_solutions: int = Field(default=500, ge=0)
    """Default cap on the number of solutions returned by a search. Default: 500."""

    max_words: int = Field(default=4, ge=1)
    """Longest chain (in words) explored by iterative deepening. Default: 4."""

    batch_size: int = Field(default=100, ge=1)
    """Number of solutions per batch delivered by the streaming search. Default: 100."""

    dictionary_path: str = "dictionary.txt"
    """Dictionary file used by the command line when `--dictionary` is not given."""

    default_frequency: int = Field(default=15, ge=-128, le=127)
    """Frequency assigned to dictionary lines holding a bare word. Default: 15."""

    model_config = SettingsConfigDict(
        env_prefix="LETTERBOXED_",
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
