#!/usr/bin/env python3
"""Direct launcher for the Budget Calculator.

This script launches Streamlit with the budget_calculator directory as the
app root.
"""

import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.resolve()
app_dir = project_root / "budget_calculator"

if __name__ == "__main__":
    os.chdir(app_dir)
    sys.path.insert(0, str(project_root))
    subprocess.run([
        sys.executable, "-m", "streamlit", "run",
        "Home.py"
    ])
