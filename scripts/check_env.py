"""Check that the active settings module has everything it needs.

Usage: APP_ENV=production python scripts/check_env.py
"""

from __future__ import annotations

import importlib
import sys

from dotenv import load_dotenv

from timein_system.config import get_settings_module
from timein_system.config.validate import validate_environment
from timein_system.core.exceptions import ConfigurationError


def main() -> int:
    load_dotenv(override=False)
    module = get_settings_module()
    settings = importlib.import_module(module)
    config = {name: getattr(settings, name) for name in dir(settings) if name.isupper()}
    try:
        validate_environment(config)
    except ConfigurationError as exc:
        print(f"[timein-system] {module}: {exc}", file=sys.stderr)
        return 1
    print(f"[timein-system] {module}: ok (mail backend={config.get('MAIL_BACKEND')})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
