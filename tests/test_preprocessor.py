import unittest
from species.parser.preprocessor import MathSource, extract_math_blocks


class TestPreprocessor(unittest.TestCase):
    def test_single_block(self):
        content = r"""
Number Types
~~~~~~~~~~~~

.. math::
   \begin{array}{llll}
   \production{number type} & \numtype &::=&
     \I32 ~|~ \I64 \\
   \end{array}

Text after the block.
"""
        blocks = extract_math_blocks(content)
        self.assertEqual(len(blocks), 1)
        self.assertEqual(
            blocks[0].content,
            r"   \begin{array}{llll}   \production{number type} & \numtype &::=&"
            r"     \I32 ~|~ \I64 \\   \end{array}",
        )
        self.assertEqual(blocks[0].start_line, 5)

    def test_multiple_blocks(self):
        content = """.. math::
   A

Text
.. math::
   B
   C
"""
        blocks = extract_math_blocks(content)
        self.assertEqual(len(blocks), 2)
        self.assertEqual(blocks[0].content, "   A")
        self.assertEqual(blocks[1].content, "   B   C")

    def test_marker_without_block(self):
        self.assertEqual(extract_math_blocks(".. math::\n\n   A\n"), [])
        self.assertEqual(extract_math_blocks("text\n.. math::"), [])

    def test_custom_marker(self):
        content = ".. productionlist::\n   A\n\n.. math::\n   B\n"
        blocks = extract_math_blocks(content, marker=".. productionlist::")
        self.assertEqual([b.content for b in blocks], ["   A"])

    def test_indented_marker(self):
        content = "   .. math::\n      A\n"
        blocks = extract_math_blocks(content)
        self.assertEqual(blocks[0].content, "      A")

    def test_locate(self):
        content = "intro\n.. math::\n  ab\n  cde\n  f\n"
        block = extract_math_blocks(content)[0]
        self.assertEqual(block.content, "  ab  cde  f")
        self.assertEqual(block.locate(0), (2, 0))
        self.assertEqual(block.locate(3), (2, 3))
        self.assertEqual(block.locate(4), (3, 0))
        self.assertEqual(block.locate(6), (3, 2))
        self.assertEqual(block.locate(11), (4, 2))
        # end of content maps past the last character of the last line
        self.assertEqual(block.locate(12), (4, 3))

    def test_repr(self):
        block = MathSource("  A", [(3, 0)])
        self.assertEqual(repr(block), "MathSource(start_line=3, lines=1)")


if __name__ == '__main__':
    unittest.main()
