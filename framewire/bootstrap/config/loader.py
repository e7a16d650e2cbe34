import os
from pathlib import Path

CONFIG_ENV = "FRAMEWIRECONFIG"


def get_configfile() -> Path | None:
    """
    Resolve the optional YAML settings file.

    The CLI exports `--config` into FRAMEWIRECONFIG, so the environment
    variable is the single place the path is read from. No file configured
    means settings come from FRAMEWIRE_* variables and defaults only.
    """
    raw = os.getenv(CONFIG_ENV)
    if not raw:
        return None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable\n"
            "  - Or unset it to run with defaults."
        )

    return file
