"""
Contract Deployment Wrapper
Runs scripts/deploy_contracts.py
"""

import subprocess
import sys
from pathlib import Path

if __name__ == "__main__":
    print("=" * 70)
    print("Study Contracts Deployment")
    print("=" * 70)
    print()

    # Run deployment script from the repo root so `-m scripts...` resolves
    result = subprocess.run(
        [sys.executable, "-m", "scripts.deploy_contracts", *sys.argv[1:]],
        cwd=Path(__file__).resolve().parent
    )

    sys.exit(result.returncode)
