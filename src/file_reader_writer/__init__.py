"""file_reader_writer: write or append text to a file and echo the result."""

__version__ = "0.1.0"
