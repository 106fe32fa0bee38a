"""Tests for TextExtractor (file bytes to plain text)."""
import io
import unittest

from docx import Document

from core.errors import DecodeError, UnsupportedFormatError
from etl.resume.text_extractor import TextExtractor, content_type_for
from tests.fixtures.resume_fixtures import make_blank_pdf


def make_docx(paragraphs, table_rows=None) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class TestTextExtractor(unittest.TestCase):

    def setUp(self):
        self.extractor = TextExtractor()

    def test_plain_text(self):
        text = self.extractor.extract(b"Jane Smith\njane@example.com", "resume.txt")
        self.assertEqual(text, "Jane Smith\njane@example.com")

    def test_utf8_bom_is_stripped(self):
        text = self.extractor.extract("\ufeffJos\u00e9 N\u00fa\u00f1ez".encode("utf-8"), "resume.txt")
        self.assertEqual(text, "Jos\u00e9 N\u00fa\u00f1ez")

    def test_invalid_utf8_is_replaced(self):
        text = self.extractor.extract(b"Jane \xff Smith", "resume.txt")
        self.assertIn("Jane", text)
        self.assertIn("\ufffd", text)

    def test_unknown_extension_decoded_as_text(self):
        self.assertEqual(self.extractor.extract(b"plain", "resume.md"), "plain")

    def test_empty_file(self):
        with self.assertRaises(DecodeError) as ctx:
            self.extractor.extract(b"", "resume.pdf")
        self.assertEqual(str(ctx.exception), "Empty file")

    def test_docx_paragraphs_and_tables(self):
        content = make_docx(
            ["Jane Smith", "", "Skills"],
            table_rows=[["Python", "SQL"], ["Docker", ""]],
        )
        text = self.extractor.extract(content, "resume.docx")
        self.assertEqual(text, "Jane Smith\nSkills\nPython | SQL\nDocker")

    def test_doc_extension_uses_docx_reader(self):
        content = make_docx(["Jane Smith"])
        self.assertEqual(self.extractor.extract(content, "RESUME.DOC"), "Jane Smith")

    def test_corrupt_docx(self):
        with self.assertRaises(UnsupportedFormatError) as ctx:
            self.extractor.extract(b"definitely not a zip archive", "resume.docx")
        self.assertIsNotNone(ctx.exception.__cause__)

    def test_corrupt_pdf(self):
        with self.assertRaises(UnsupportedFormatError):
            self.extractor.extract(b"not a pdf at all", "resume.pdf")

    def test_unsupported_format_is_decode_error(self):
        # Callers handle both failure kinds with one except clause
        with self.assertRaises(DecodeError):
            self.extractor.extract(b"garbage", "resume.pdf")

    def test_pdf_without_text(self):
        with self.assertRaises(DecodeError) as ctx:
            self.extractor.extract(make_blank_pdf(), "scan.pdf")
        self.assertEqual(str(ctx.exception), "No text could be extracted from the file")

    def test_docx_without_text(self):
        with self.assertRaises(DecodeError):
            self.extractor.extract(make_docx(["", "   "]), "resume.docx")

    def test_whitespace_only_text(self):
        with self.assertRaises(DecodeError):
            self.extractor.extract(b" \n\t\n", "resume.txt")

    def test_is_supported(self):
        self.assertTrue(self.extractor.is_supported("cv.PDF"))
        self.assertTrue(self.extractor.is_supported("cv.txt"))
        self.assertFalse(self.extractor.is_supported("cv.png"))
        self.assertFalse(self.extractor.is_supported("cv"))


class TestContentTypeFor(unittest.TestCase):

    def test_known_extensions(self):
        self.assertEqual(content_type_for("cv.pdf"), "application/pdf")
        self.assertEqual(content_type_for("cv.doc"), "application/msword")
        self.assertEqual(
            content_type_for("cv.docx"),
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        )
        self.assertEqual(content_type_for("cv.txt"), "text/plain")

    def test_unknown_extension(self):
        self.assertEqual(content_type_for("cv.rtf"), "application/octet-stream")
        self.assertEqual(content_type_for(""), "application/octet-stream")


if __name__ == '__main__':
    unittest.main()
