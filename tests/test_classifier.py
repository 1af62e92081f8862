"""Tests for text/binary classification."""

import pytest

from contentdiff.core.detect.classifier import (
    ClassifierOptions,
    ContentClassifier,
    classify,
    control_ratio,
    normalize_extension,
    normalize_media_type,
)
from contentdiff.core.models import ClassificationHint, ContentKind

from tests.conftest import PNG_HEADER


def hint(media_type=None, extension=None):
    return ClassificationHint(declared_media_type=media_type, file_extension=extension)


class TestSignaturePriority:
    """Sniffed signatures override caller hints."""

    def test_png_beats_declared_text(self, classifier):
        """A PNG header wins over a declared text type."""
        result = classifier.classify(PNG_HEADER, hint('text/plain', 'txt'))
        assert result.is_text is False
        assert result.media_type == 'image/png'

    def test_zip_beats_text_extension(self, classifier):
        """A ZIP header wins over a text extension."""
        result = classifier.classify(b'PK\x03\x04rest-of-archive', hint(extension='txt'))
        assert result.is_text is False
        assert result.media_type == 'application/zip'

    def test_xml_prolog_is_text(self, classifier):
        """An XML prolog is a text container."""
        result = classifier.classify(b'<?xml version="1.0"?>\n<a/>\n')
        assert result.is_text is True
        assert result.media_type == 'application/xml'

    def test_text_starting_with_font_tag(self, classifier):
        """Prose beginning with "OTTO" is not an OpenType font."""
        result = classifier.classify(b"OTTO was here\n", hint('text/plain', 'txt'))
        assert result.is_text is True
        assert result.media_type == 'text/plain'

    def test_opentype_header(self, classifier):
        result = classifier.classify(b'OTTO\x00\x0b\x00\x80\x00\x03')
        assert result.is_text is False
        assert result.media_type == 'font/otf'

    def test_pdf_is_binary(self, classifier):
        result = classifier.classify(b'%PDF-1.7\n%\xe2\xe3\xcf\xd3\n')
        assert result.kind == ContentKind.BINARY
        assert result.media_type == 'application/pdf'


class TestDeclaredMediaType:
    """Declared media types decide when no signature matches."""

    def test_text_prefix_wins_over_content(self, classifier):
        """text/* is text even for control-heavy content."""
        data = bytes(range(1, 7)) * 50
        result = classifier.classify(data, hint('text/csv'))
        assert result.is_text is True
        assert result.media_type == 'text/csv'

    def test_text_prefix_wins_over_nul_bytes(self, classifier):
        """A declared text type is trusted even with NUL bytes."""
        result = classifier.classify(b'a\x00b', hint('text/plain'))
        assert result.is_text is True

    @pytest.mark.parametrize('media_type', [
        'application/json',
        'application/json; charset=utf-8',
        'APPLICATION/YAML',
        'application/x-yaml',
        'application/toml',
        'application/javascript',
        'application/typescript',
        'application/graphql',
    ])
    def test_structured_text_types(self, classifier, media_type):
        result = classifier.classify(b'\x01\x02\x03', hint(media_type))
        assert result.is_text is True
        assert result.media_type == media_type

    @pytest.mark.parametrize('media_type', [
        'image/svg+xml',
        'audio/mpeg',
        'video/mp4',
        'application/pdf',
        'application/zip',
        'application/x-zip-compressed',
    ])
    def test_binary_types(self, classifier, media_type):
        """Binary prefixes win over text-looking content and extensions."""
        result = classifier.classify(b'plain words\n', hint(media_type, 'txt'))
        assert result.is_text is False
        assert result.media_type == media_type

    def test_undecided_type_falls_through_to_extension(self, classifier):
        """An unknown declared type does not block the extension check."""
        result = classifier.classify(b'\x01' * 100, hint('application/x-custom', 'md'))
        assert result.is_text is True
        assert result.media_type == 'application/x-custom'


class TestExtensionHint:
    """Text extensions force a text verdict."""

    def test_octet_stream_with_ts_extension(self, classifier):
        result = classifier.classify(b'const x = 1;\n', hint('application/octet-stream', 'ts'))
        assert result.is_text is True
        assert result.media_type == 'application/octet-stream'

    def test_extension_without_declared_type(self, classifier):
        result = classifier.classify(b'\x00\x01\x02', hint(extension='json'))
        assert result.is_text is True
        assert result.media_type == 'text/plain'

    def test_extension_normalization(self, classifier):
        """Leading dots and upper case are tolerated."""
        result = classifier.classify(b'\x01' * 10, hint(extension='.YML'))
        assert result.is_text is True

    def test_unknown_extension_sniffs_content(self, classifier):
        result = classifier.classify(b'\x00\x01', hint(extension='bin'))
        assert result.is_text is False
        assert result.media_type == 'application/octet-stream'

    def test_extra_text_extensions(self):
        options = ClassifierOptions(extra_text_extensions=frozenset({'proto'}))
        result = ContentClassifier(options).classify(b'\x00', hint(extension='proto'))
        assert result.is_text is True


class TestContentSniffing:
    """Control-byte ratio fallback."""

    def test_plain_text(self, classifier):
        result = classifier.classify(b'hello world\n')
        assert result.is_text is True
        assert result.media_type == 'application/octet-stream'

    def test_nul_byte_is_binary(self, classifier):
        result = classifier.classify(b'hello\x00world')
        assert result.is_text is False

    def test_nul_byte_anywhere_in_sample(self, classifier):
        data = b'a' * 4000 + b'\x00' + b'b' * 50
        assert classifier.classify(data).is_text is False

    def test_mostly_control_bytes_is_binary(self, classifier):
        assert classifier.classify(bytes([0, 120, 3, 255, 10])).is_text is False

    def test_below_threshold_is_text(self, classifier):
        """One control byte in twenty is 5%."""
        data = b'\x1b' + b'x' * 19
        assert classifier.classify(data).is_text is True

    def test_at_threshold_is_binary(self, classifier):
        """Exactly 10% is not below the threshold."""
        data = b'\x1b' * 2 + b'x' * 18
        assert classifier.classify(data).is_text is False

    def test_whitespace_controls_are_not_counted(self, classifier):
        data = b'\t\n\r\x0b\x0c\x07\x08' * 20
        assert classifier.classify(data).is_text is True

    def test_only_leading_sample_is_examined(self, classifier):
        data = b'x' * 4096 + b'\x01' * 4096
        assert classifier.classify(data).is_text is True

    def test_sample_size_is_configurable(self):
        data = b'x' * 100 + b'\x01' * 100
        options = ClassifierOptions(sniff_bytes=200)
        assert ContentClassifier(options).classify(data).is_text is False

    def test_threshold_is_configurable(self):
        data = b'\x01' * 3 + b'x' * 7
        options = ClassifierOptions(control_ratio_threshold=0.5)
        assert ContentClassifier(options).classify(data).is_text is True

    def test_empty_buffer_is_text(self, classifier):
        result = classifier.classify(b'')
        assert result.is_text is True
        assert result.media_type == 'application/octet-stream'


class TestDeterminism:

    def test_identical_inputs_identical_output(self):
        data = b'some \x02 bytes'
        h = hint(extension='dat')
        assert classify(data, h) == classify(data, h)

    def test_missing_hint(self):
        assert classify(b'abc').is_text is True


class TestHelpers:

    def test_control_ratio_empty(self):
        assert control_ratio(b'') == 0.0

    def test_control_ratio_nul(self):
        assert control_ratio(b'abc\x00') == 1.0

    def test_control_ratio_value(self):
        assert control_ratio(b'\x01\x02ab') == pytest.approx(0.5)

    def test_normalize_media_type(self):
        assert normalize_media_type(' Text/HTML; charset=UTF-8 ') == 'text/html'
        assert normalize_media_type(None) == ''

    def test_normalize_extension(self):
        assert normalize_extension('.Py') == 'py'
        assert normalize_extension(None) == ''
