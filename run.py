"""
Entry Point Script (Bootstrap)
==============================
Starts the Dice Totals window straight from a source checkout.

Why is this file needed?
------------------------
1. It is located outside the 'src' package so the calculator can be started
   without 'pip install -e .'.
2. It puts 'src' on 'sys.path' so 'dicetotals' resolves to the checkout, and
   the profiles are read from the same QSettings file as the installed
   'dicetotals' command uses.

Usage:
    $ python run.py
"""
import sys
import os

current_dir: str = os.path.dirname(os.path.abspath(__file__))
src_path: str = os.path.join(current_dir, 'src')
sys.path.insert(0, src_path)

# Own taskbar entry on Windows instead of grouping under python.exe
appid = 'DiceTotals.Desktop'
try:
    import ctypes
    ctypes.windll.shell32.SetCurrentProcessExplicitAppUserModelID(appid)
except (AttributeError, ImportError):
    # Not on Windows
    pass

from dicetotals.main import main

if __name__ == "__main__":
    main()
