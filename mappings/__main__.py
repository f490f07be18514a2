"""
Mappings Module Entry Point
============================

Allows running the CLI via: python -m mappings
"""

from mappings.cli import main

if __name__ == "__main__":
    main()
