"""logipath configuration and path constants."""

from pathlib import Path

# Rule files are looked up relative to where logipath is invoked
PROJECT_ROOT = Path.cwd()

# Default single-rule file read by the CLI
RULE_PATH = PROJECT_ROOT / "logipath.yaml"

# Output separator when a rule does not name one
DEFAULT_FS_SEP = "/"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
