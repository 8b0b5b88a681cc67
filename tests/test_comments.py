"""
Tests for Comment Geometry Decoding
===================================
"""

from hrm_profile.instructions import (
    CommentPoint,
    RawComment,
    decode_comment,
    decode_comments,
)


class TestDecodeComment:
    """Tests for splitting point entries into strokes."""

    def test_sentinel_splits_lines(self, builder):
        b = builder
        raw = RawComment((b.point(1, 1), b.point(2, 2), b.SENTINEL, b.point(5, 5)))

        assert decode_comment(raw) == (
            (CommentPoint(1, 1), CommentPoint(2, 2)),
            (CommentPoint(5, 5),),
        )

    def test_trailing_sentinel(self, builder):
        raw = RawComment((builder.point(3, 4), builder.SENTINEL))
        assert decode_comment(raw) == ((CommentPoint(3, 4),),)

    def test_every_sentinel_closes_a_line(self, builder):
        """Leading and repeated sentinels give empty strokes."""
        b = builder
        raw = RawComment((b.SENTINEL, b.point(1, 2), b.SENTINEL, b.SENTINEL, b.point(3, 4)))
        assert decode_comment(raw) == (
            (),
            (CommentPoint(1, 2),),
            (),
            (CommentPoint(3, 4),),
        )

    def test_lone_sentinel(self, builder):
        assert decode_comment(RawComment((builder.SENTINEL,))) == ((),)

    def test_empty_comment(self):
        assert decode_comment(RawComment()) == ()

    def test_full_coordinate_range(self, builder):
        raw = RawComment((builder.point(0xFFFF, 0),))
        (line,) = decode_comment(raw)
        assert line[0] == CommentPoint(65535, 0)

    def test_point_byte_order(self):
        """x is the first little-endian half-word, y the second."""
        assert CommentPoint.from_bytes(b"\x34\x12\x78\x56") == CommentPoint(0x1234, 0x5678)


class TestDecodeComments:
    """Tests for decoding every comment of a tab."""

    def test_keeps_index_order(self, builder):
        raws = [RawComment((builder.point(i + 1, i + 1),)) for i in range(3)]
        comments = decode_comments(raws)
        assert [c[0][0].x for c in comments] == [1, 2, 3]
