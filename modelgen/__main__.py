# modelgen/__main__.py
from modelgen.cli.cli import app

if __name__ == "__main__":
    app()
