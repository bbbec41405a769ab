"""Global test fixtures."""

import os

# Keep a developer's ~/.config/midivault/config.yaml out of the test run.
# This must happen at module load time, before any test imports Config.
os.environ.setdefault("MIDIVAULT_CONFIG_FILE", os.devnull)
