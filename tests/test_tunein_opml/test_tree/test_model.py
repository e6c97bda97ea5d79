"""Tests for the document model."""

from tunein_opml.model import Audio, Document, Format, Group, Head, Link, Text, Version


def _nested_document() -> Document:
    return Document(
        version=Version(major=1),
        head=Head(title="Kraków", status=300),
        outlines=[
            Group(text="Stacje", key="stations", children=[
                Audio(text="KRK.FM", url="http://x/krk", format=Format.MP3),
                Group(text="Rock", children=[Text("None yet")]),
            ]),
            Link(text="More", url="http://x/more", key="more"),
        ],
    )


class TestDefaults:
    """Test default values of model types."""

    def test_document_defaults(self):
        """Test an empty document."""
        document = Document()

        assert document.version == Version(major=0, minor=0)
        assert document.head == Head(title="", status=None)
        assert document.outlines == []

    def test_group_children_are_not_shared(self):
        """Test that every group gets its own children list."""
        first, second = Group(), Group()
        first.add_child(Text("a"))

        assert second.children == []


class TestWalk:
    """Test depth-first traversal."""

    def test_walk_yields_document_order_with_depth(self):
        """Test traversal order and depths."""
        walked = [(depth, outline.text) for depth, outline in _nested_document().walk()]

        assert walked == [
            (0, "Stacje"),
            (1, "KRK.FM"),
            (1, "Rock"),
            (2, "None yet"),
            (0, "More"),
        ]

    def test_outline_count(self):
        """Test counting outlines at every depth."""
        assert _nested_document().outline_count == 5
        assert Document().outline_count == 0

    def test_walk_handles_deep_nesting(self):
        """Test traversal deeper than the recursion limit."""
        root = Group(text="0")
        current = root
        for i in range(1, 5000):
            child = Group(text=str(i))
            current.add_child(child)
            current = child

        depths = [depth for depth, _ in Document(outlines=[root]).walk()]

        assert depths[-1] == 4999


class TestToDict:
    """Test dictionary conversion."""

    def test_document_to_dict(self):
        """Test the JSON-ready representation of a nested document."""
        data = _nested_document().to_dict()

        assert data["version"] == {"major": 1, "minor": 0}
        assert data["head"] == {"title": "Kraków", "status": 300}
        group = data["outlines"][0]
        assert group["type"] == "group"
        assert [child["type"] for child in group["children"]] == ["audio", "group"]
        assert group["children"][0]["format"] == "mp3"
        assert group["children"][1]["children"] == [{"type": "text", "text": "None yet"}]
        assert data["outlines"][1] == {
            "type": "link",
            "text": "More",
            "url": "http://x/more",
            "key": "more",
            "guide_id": "",
        }

    def test_audio_to_dict_unknown_format(self):
        """Test rendering of the default audio format."""
        assert Audio().to_dict()["format"] == "unknown"
