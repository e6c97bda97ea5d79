"""Test module for tunein_opml package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    import tunein_opml

    assert tunein_opml is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    import tunein_opml

    assert isinstance(tunein_opml.__version__, str)
    assert tunein_opml.__version__ == "0.1.0"


def test_package_exports_reading_api() -> None:
    """Test that the level 1 reading functions are exported."""
    import tunein_opml

    for name in ("read", "read_bytes", "read_file", "read_string"):
        assert name in tunein_opml.__all__
        assert callable(getattr(tunein_opml, name))


def test_package_exports_model_and_errors() -> None:
    """Test that model types and the error taxonomy are exported."""
    import tunein_opml

    for name in ("Document", "Group", "Link", "Audio", "Text", "OpmlError", "ErrorKind"):
        assert hasattr(tunein_opml, name)
