"""Allow ``python -m file_reader_writer``."""

from file_reader_writer.cli import main

if __name__ == "__main__":
    main()
