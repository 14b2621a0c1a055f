"""Launch the Streamlit console: ``python -m gacha_admin``."""

import sys
from pathlib import Path

from streamlit.web import cli as stcli


def run():
    app_path = Path(__file__).parent / "ui" / "app.py"
    sys.argv = ["streamlit", "run", str(app_path)] + sys.argv[1:]
    sys.exit(stcli.main())


if __name__ == "__main__":
    run()
