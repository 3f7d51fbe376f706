"""
Punto de entrada: python -m ebsattach
"""

from ebsattach.cli.app import main

if __name__ == "__main__":
    main()
