"""Allow running as: python -m jewelry_pricing"""

from jewelry_pricing.main import main

if __name__ == "__main__":
    main()
