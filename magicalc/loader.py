"""
Definition Loader
=================
Reads a definition file fully into memory and compiles it.
"""
from .interpreter import compile_source
from .magic import Magic, MagicError


class DefinitionFileError(MagicError):
    """The definition file is missing, unreadable or not valid UTF-8."""
    pass


def load_file(filepath: str) -> str:
    """Read the whole file as text."""
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            return f.read()
    except FileNotFoundError:
        raise DefinitionFileError(f"The file {filepath} doesn't exist!") from None
    except UnicodeDecodeError as e:
        raise DefinitionFileError(f"The file {filepath} is not valid UTF-8: {e.reason}") from e
    except OSError as e:
        raise DefinitionFileError(f"Cannot read {filepath}: {e.strerror}") from e


def process_file_to_magic(filepath: str) -> list[Magic]:
    """Load and compile a definition file. Raises DefinitionFileError or ParseError."""
    return compile_source(load_file(filepath))
