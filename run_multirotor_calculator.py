#!/usr/bin/env python3
"""
Multirotor Calculator Launcher
==============================

Runs the multirotor performance calculation for the default aircraft and
prints the remarks report, then shows the range and motor charts.

Usage:
------
    # From the project root directory:
    python run_multirotor_calculator.py

    # Report only, no plot window:
    python run_multirotor_calculator.py --no-plot

    # Include the full calculation trace:
    python run_multirotor_calculator.py --debug

Requirements:
------------
- Python 3.8+
- numpy
- pandas
- matplotlib
"""

import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Path Configuration
# -------------------------------------------------------------------------

project_root = Path(__file__).parent.resolve()
sys.path.insert(0, str(project_root))


def check_dependencies():
    """Check that all required packages are installed."""
    try:
        import numpy
        import pandas
        import matplotlib
        print(f"  [OK] numpy {numpy.__version__}")
        print(f"  [OK] pandas {pandas.__version__}")
        print(f"  [OK] matplotlib {matplotlib.__version__}")
    except ImportError as e:
        print(f"\n[ERROR] Missing required dependency: {e}")
        print("\nPlease install dependencies using:")
        print("    pip install -e .")
        sys.exit(1)


def main():
    """Calculate and report the default aircraft."""
    print("=" * 60)
    print("  picoCalc - Multirotor Performance Calculator")
    print("=" * 60)
    print()
    print("Checking dependencies...")
    check_dependencies()
    print()

    from src.multirotor_analyzer import (
        DEFAULT_AIRCRAFT,
        CalculationDebugger,
        calculate_performance,
    )

    debugger = CalculationDebugger() if "--debug" in sys.argv else None
    result = calculate_performance(DEFAULT_AIRCRAFT, debugger=debugger)

    if debugger is not None:
        print(debugger.get_report())
        print()

    print(result.summary())

    if "--no-plot" in sys.argv:
        return

    import matplotlib.pyplot as plt
    from src.multirotor_analyzer import MultirotorPlotter

    MultirotorPlotter().plot_performance(result)
    plt.show()


if __name__ == "__main__":
    main()
