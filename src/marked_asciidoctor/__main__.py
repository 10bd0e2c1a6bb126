"""Allow ``python -m marked_asciidoctor``."""

from marked_asciidoctor.ui.cli import main


if __name__ == "__main__":
    main()
