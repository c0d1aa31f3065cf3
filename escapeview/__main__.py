"""
Allow running the package directly: python -m escapeview
"""
from .cli import main

main()
