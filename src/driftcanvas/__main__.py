"""Run with: python -m driftcanvas"""
from driftcanvas.main import main

if __name__ == "__main__":
    main()
