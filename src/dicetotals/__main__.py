"""
Run with: python -m dicetotals
"""
from dicetotals.main import main

if __name__ == "__main__":
    main()
