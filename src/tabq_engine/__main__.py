"""``python -m tabq_engine`` runs the tabq CLI."""

from tabq_engine.cli.app import main

if __name__ == "__main__":  # pragma: no cover
    main()
