#!/usr/bin/env python3
from orgcloner.cli.main import app

if __name__ == "__main__":
    app()
