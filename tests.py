import unittest
import sys
import tempfile
import os
import io
import random
import shutil
from collections import Counter
from contextlib import redirect_stdout, redirect_stderr
from unittest import mock

from huffman import HuffmanNode, HuffmanHeap, merge_nodes, build_tree, assign_codes
from scanner import count_frequencies, scan_frequencies, build_heap, scan_input
from encoder import encode_stream, write_encoded
from report import CompressionStats, compute_statistics, display_symbol, format_node, format_report
from coder import HuffmanCoder, leaf_frequencies, SUCCESS_MESSAGE, FAILURE_MESSAGE
from main import main


def weighted_length(frequencies, codes):
    return sum(freq * len(codes[symbol]) for symbol, freq in frequencies.items())


def is_prefix_free(codes):
    values = sorted(codes.values())
    for shorter, longer in zip(values, values[1:]):
        if longer.startswith(shorter):
            return False
    return True


def codes_for(data):
    frequencies = Counter(data)
    return frequencies, assign_codes(build_tree(build_heap(frequencies)))


class TestHuffmanHeap(unittest.TestCase):
    def test_remove_min_order(self):
        random.seed(7)
        heap = HuffmanHeap()
        for i in range(200):
            heap.insert(HuffmanNode(i, random.randint(0, 50)))

        removed = [heap.remove_min().freq for _ in range(200)]
        self.assertEqual(removed, sorted(removed))
        self.assertEqual(heap.size(), 0)

    def test_min_at_root_after_mixed_operations(self):
        random.seed(11)
        heap = HuffmanHeap()
        for step in range(500):
            if heap.size() and random.random() < 0.4:
                expected = min(node.freq for node in heap.nodes)
                self.assertEqual(heap.remove_min().freq, expected)
            else:
                heap.insert(HuffmanNode(step, random.randint(0, 100)))

            if heap.size():
                self.assertEqual(heap.nodes[0].freq, min(node.freq for node in heap.nodes))

    def test_heap_order_property(self):
        heap = HuffmanHeap()
        for freq in [9, 4, 7, 1, 8, 2, 2, 6, 3]:
            heap.insert(HuffmanNode(freq, freq))
        heap.remove_min()

        for i, node in enumerate(heap.nodes):
            for child in (2 * i + 1, 2 * i + 2):
                if child < len(heap.nodes):
                    self.assertLessEqual(node.freq, heap.nodes[child].freq)

    def test_equal_frequency_does_not_rise(self):
        heap = HuffmanHeap()
        first = HuffmanNode(1, 5)
        second = HuffmanNode(2, 5)
        heap.insert(first)
        heap.insert(second)
        self.assertIs(heap.nodes[0], first)
        self.assertIs(heap.remove_min(), first)

    def test_parent_equal_to_child_sinks(self):
        heap = HuffmanHeap()
        lightest = HuffmanNode(0, 1)
        first = HuffmanNode(1, 2)
        second = HuffmanNode(2, 2)
        for node in (lightest, first, second):
            heap.insert(node)

        self.assertIs(heap.remove_min(), lightest)
        self.assertEqual(heap.nodes, [first, second])

    def test_left_child_wins_tie(self):
        heap = HuffmanHeap()
        lightest = HuffmanNode(0, 1)
        left = HuffmanNode(1, 3)
        right = HuffmanNode(2, 3)
        heaviest = HuffmanNode(3, 5)
        for node in (lightest, left, right, heaviest):
            heap.insert(node)
        self.assertEqual(heap.nodes, [lightest, left, right, heaviest])

        self.assertIs(heap.remove_min(), lightest)
        self.assertEqual(heap.nodes, [left, heaviest, right])

    def test_size_and_len(self):
        heap = HuffmanHeap()
        self.assertEqual(heap.size(), 0)
        heap.insert(HuffmanNode(1, 1))
        heap.insert(HuffmanNode(2, 1))
        self.assertEqual(heap.size(), 2)
        self.assertEqual(len(heap), 2)

    def test_remove_from_empty_heap(self):
        with self.assertRaises(IndexError):
            HuffmanHeap().remove_min()


class TestHuffmanTree(unittest.TestCase):
    def test_node_fields(self):
        leaf = HuffmanNode(97, 3)
        self.assertTrue(leaf.is_leaf())
        self.assertIsNone(leaf.left)
        self.assertIsNone(leaf.right)
        with self.assertRaises(AttributeError):
            leaf.freq = 4

    def test_merge_nodes(self):
        first = HuffmanNode(97, 2)
        second = HuffmanNode(98, 3)
        parent = merge_nodes(first, second)
        self.assertFalse(parent.is_leaf())
        self.assertIsNone(parent.symbol)
        self.assertEqual(parent.freq, 5)
        self.assertIs(parent.left, first)
        self.assertIs(parent.right, second)

    def test_internal_nodes_have_two_children(self):
        root = build_tree(build_heap(Counter(b"abracadabra alakazam")))

        stack = [root]
        leaves = 0
        while stack:
            node = stack.pop()
            if node.is_leaf():
                self.assertIsNone(node.left)
                self.assertIsNone(node.right)
                leaves += 1
            else:
                self.assertIsNotNone(node.left)
                self.assertIsNotNone(node.right)
                self.assertEqual(node.freq, node.left.freq + node.right.freq)
                stack.extend([node.left, node.right])

        self.assertEqual(leaves, len(set(b"abracadabra alakazam")))
        self.assertEqual(root.freq, len(b"abracadabra alakazam"))

    def test_single_leaf_tree(self):
        heap = build_heap({ord('z'): 4})
        root = build_tree(heap)
        self.assertTrue(root.is_leaf())
        self.assertEqual(assign_codes(root), {ord('z'): '0'})

    def test_empty_heap_rejected(self):
        with self.assertRaises(ValueError):
            build_tree(HuffmanHeap())

    def test_known_distribution(self):
        frequencies, codes = codes_for(b"aaaaabbbcc")
        self.assertEqual(codes, {ord('a'): '0', ord('c'): '10', ord('b'): '11'})
        self.assertEqual(weighted_length(frequencies, codes), 15)

    def test_prefix_free(self):
        _, codes = codes_for(b"The quick brown fox jumps over the lazy dog")
        self.assertTrue(is_prefix_free(codes))

    def test_higher_frequency_not_longer(self):
        random.seed(3)
        data = bytes(random.choice(b"aaaaaaaabbbbbccccddeefg\n ") for _ in range(5000))
        frequencies, codes = codes_for(data)

        for a in frequencies:
            for b in frequencies:
                if frequencies[a] > frequencies[b]:
                    self.assertLessEqual(len(codes[a]), len(codes[b]))

    def test_deterministic_codes(self):
        data = b"abcdabcdeeff"
        self.assertEqual(codes_for(data)[1], codes_for(data)[1])


class TestScanner(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, name, data):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def test_count_frequencies(self):
        frequencies = count_frequencies(io.BytesIO(b"aaaaabbbcc"))
        self.assertEqual(frequencies, {ord('a'): 5, ord('b'): 3, ord('c'): 2})

    def test_scan_twice_is_identical(self):
        path = self._write("input.txt", b"Hello World!\r\n\tHello again\n")
        self.assertEqual(scan_frequencies(path), scan_frequencies(path))

    def test_text_mode_keeps_line_endings(self):
        path = os.path.join(self.temp_dir, "text.txt")
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write("héllo\r\n")

        frequencies = scan_frequencies(path, encoding='utf-8')
        self.assertEqual(frequencies['é'], 1)
        self.assertEqual(frequencies['l'], 2)
        self.assertEqual(frequencies['\r'], 1)
        self.assertEqual(frequencies['\n'], 1)

    def test_scan_input_heap(self):
        path = self._write("input.txt", b"aaaaabbbcc")
        heap = scan_input(path)
        self.assertEqual(heap.size(), 3)
        self.assertEqual([heap.remove_min().freq for _ in range(3)], [2, 3, 5])

    def test_empty_input(self):
        path = self._write("empty.txt", b"")
        self.assertEqual(scan_frequencies(path), {})
        self.assertEqual(scan_input(path).size(), 0)


class TestEncoder(unittest.TestCase):
    def test_encode_stream(self):
        frequencies, codes = codes_for(b"aaaaabbbcc")
        sink = io.StringIO()
        bits = encode_stream(io.BytesIO(b"abcab"), sink, codes)
        self.assertEqual(sink.getvalue(), "0111001" + "1")
        self.assertEqual(bits, 8)

    def test_bits_match_weighted_length(self):
        data = b"Lorem ipsum dolor sit amet, consectetur adipiscing elit.\n" * 20
        frequencies, codes = codes_for(data)
        sink = io.StringIO()
        bits = encode_stream(io.BytesIO(data), sink, codes)
        self.assertEqual(bits, weighted_length(frequencies, codes))
        self.assertEqual(len(sink.getvalue()), bits)
        self.assertLessEqual(set(sink.getvalue()), {'0', '1'})

    def test_unknown_symbol(self):
        _, codes = codes_for(b"ab")
        with self.assertRaises(KeyError):
            encode_stream(io.BytesIO(b"abc"), io.StringIO(), codes)

    def test_write_encoded_truncates_output(self):
        temp_dir = tempfile.mkdtemp()
        try:
            input_path = os.path.join(temp_dir, "in.txt")
            output_path = os.path.join(temp_dir, "out.txt")
            with open(input_path, 'wb') as f:
                f.write(b"zzzz")
            with open(output_path, 'w') as f:
                f.write("previous content that is longer")

            bits = write_encoded(input_path, output_path, {ord('z'): '0'})

            with open(output_path) as f:
                self.assertEqual(f.read(), "0000")
            self.assertEqual(bits, 4)
        finally:
            shutil.rmtree(temp_dir)


class TestReport(unittest.TestCase):
    def test_display_symbol(self):
        self.assertEqual(display_symbol(9), '[TAB]')
        self.assertEqual(display_symbol(10), '[LF]')
        self.assertEqual(display_symbol(13), '[CR]')
        self.assertEqual(display_symbol(32), '[SPACE]')
        self.assertEqual(display_symbol(None), '[NULL]')
        self.assertEqual(display_symbol(65), 'A')
        self.assertEqual(display_symbol(0), '[0x00]')
        self.assertEqual(display_symbol(200), '[0xC8]')
        self.assertEqual(display_symbol('\n'), '[LF]')
        self.assertEqual(display_symbol('é'), 'é')

    def test_format_node(self):
        self.assertEqual(format_node(32, 7), '[SPACE]: 7')

    def test_statistics(self):
        frequencies, codes = codes_for(b"aaaaabbbcc")
        stats = compute_statistics(frequencies, codes)
        self.assertEqual(stats.original_bits, 80)
        self.assertEqual(stats.compressed_bits, 15)
        self.assertEqual(stats.symbol_count, 3)
        self.assertEqual(stats.total_symbols, 10)
        self.assertAlmostEqual(stats.ratio, 0.1875)
        self.assertEqual(stats.percent, 18.8)

    def test_empty_statistics(self):
        stats = compute_statistics({}, {})
        self.assertEqual(stats, CompressionStats(0, 0, 0, 0))
        self.assertEqual(stats.ratio, 0.0)
        self.assertEqual(stats.percent, 0.0)

    def test_format_report(self):
        frequencies, codes = codes_for(b"aaaaabbbcc")
        lines = format_report(frequencies, codes, compute_statistics(frequencies, codes))
        self.assertEqual(lines, [
            "c: 2: 10",
            "b: 3: 11",
            "a: 5: 0",
            "Original size: 80 bits",
            "Compressed size: 15 bits (18.8% of original)",
        ])


class TestHuffmanCoder(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.coder = HuffmanCoder(verbose=False)
        self.output_path = os.path.join(self.temp_dir, "encoded.txt")

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, data):
        path = os.path.join(self.temp_dir, "input.txt")
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def _read_output(self):
        with open(self.output_path) as f:
            return f.read()

    def test_encode_file(self):
        input_path = self._write(b"aaaaabbbcc")
        result = self.coder.encode_file(input_path, self.output_path)

        self.assertEqual(result.bits_written, 15)
        self.assertEqual(result.stats.compressed_bits, 15)
        self.assertEqual(self._read_output(), "00000" + "111111" + "1010")
        self.assertGreaterEqual(result.elapsed_ms, 0)

    def test_single_symbol(self):
        input_path = self._write(b"zzzz")
        result = self.coder.encode_file(input_path, self.output_path)

        self.assertEqual(result.codes, {ord('z'): '0'})
        self.assertEqual(self._read_output(), "0000")
        self.assertEqual(result.stats.compressed_bits, 4)

    def test_empty_input(self):
        input_path = self._write(b"")
        result = self.coder.encode_file(input_path, self.output_path)

        self.assertEqual(result.codes, {})
        self.assertEqual(result.bits_written, 0)
        self.assertEqual(self._read_output(), "")

    def test_text_encoding(self):
        input_path = os.path.join(self.temp_dir, "text.txt")
        with open(input_path, 'w', encoding='utf-8') as f:
            f.write("éééa")

        coder = HuffmanCoder(encoding='utf-8', verbose=False)
        result = coder.encode_file(input_path, self.output_path)

        self.assertEqual(result.frequencies, {'é': 3, 'a': 1})
        self.assertEqual(result.stats.original_bits, 32)
        self.assertEqual(len(self._read_output()), 4)

    def test_run_success_message(self):
        input_path = self._write(b"Hello World! " * 100)
        message = self.coder.run(input_path, self.output_path)
        self.assertTrue(message.startswith("Successfully encoded file (time elapsed: "))
        self.assertTrue(message.endswith("ms)"))
        self.assertEqual(SUCCESS_MESSAGE.format(elapsed=3), "Successfully encoded file (time elapsed: 3ms)")

    def test_run_missing_input(self):
        missing = os.path.join(self.temp_dir, "missing.txt")
        self.assertEqual(self.coder.run(missing, self.output_path), FAILURE_MESSAGE)

    def test_run_unwritable_output(self):
        input_path = self._write(b"abc")
        self.assertEqual(self.coder.run(input_path, self.temp_dir), FAILURE_MESSAGE)

    def test_run_undecodable_text(self):
        input_path = self._write(b"\xff\xfe\xfa")
        coder = HuffmanCoder(encoding='utf-8', verbose=False)
        self.assertEqual(coder.run(input_path, self.output_path), FAILURE_MESSAGE)

    def test_run_codec_error(self):
        input_path = self._write(b"abc")
        with mock.patch('coder.scan_input', side_effect=UnicodeError("bad input")):
            self.assertEqual(self.coder.run(input_path, self.output_path), FAILURE_MESSAGE)

    def test_build_codes_from_scanned_heap(self):
        input_path = self._write(b"aaaaabbbcc")
        heap = scan_input(input_path)
        self.assertEqual(leaf_frequencies(heap), {ord('a'): 5, ord('b'): 3, ord('c'): 2})
        self.assertEqual(self.coder.build_codes(heap), {ord('a'): '0', ord('c'): '10', ord('b'): '11'})

    def test_build_codes_empty_heap(self):
        self.assertEqual(self.coder.build_codes(HuffmanHeap()), {})

    def test_verbose_report(self):
        input_path = self._write(b"aaaaabbbcc")
        out = io.StringIO()
        with redirect_stdout(out):
            HuffmanCoder(verbose=True).encode_file(input_path, self.output_path)

        self.assertIn("a: 5: 0", out.getvalue())
        self.assertIn("Compressed size: 15 bits (18.8% of original)", out.getvalue())


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.input_path = os.path.join(self.temp_dir, "input.txt")
        self.output_path = os.path.join(self.temp_dir, "encoded.txt")
        with open(self.input_path, 'wb') as f:
            f.write(b"Content of file 1\n" * 50)

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_encode(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main([self.input_path, self.output_path])

        self.assertIn("[LF]: 50:", out.getvalue())
        self.assertIn("Successfully encoded file", out.getvalue())
        self.assertTrue(os.path.isfile(self.output_path))

    def test_quiet(self):
        out = io.StringIO()
        with redirect_stdout(out):
            main(['-q', self.input_path, self.output_path])

        self.assertNotIn("Original size", out.getvalue())
        self.assertIn("Successfully encoded file", out.getvalue())

    def test_missing_input(self):
        err = io.StringIO()
        with redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main([os.path.join(self.temp_dir, "missing.txt"), self.output_path])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn(FAILURE_MESSAGE, err.getvalue())

    def test_unknown_encoding(self):
        err = io.StringIO()
        with redirect_stderr(err):
            with self.assertRaises(SystemExit) as ctx:
                main(['--encoding', 'no-such-codec', self.input_path, self.output_path])

        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Error:", err.getvalue())


def run_tests():
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestHuffmanHeap))
    suite.addTests(loader.loadTestsFromTestCase(TestHuffmanTree))
    suite.addTests(loader.loadTestsFromTestCase(TestScanner))
    suite.addTests(loader.loadTestsFromTestCase(TestEncoder))
    suite.addTests(loader.loadTestsFromTestCase(TestReport))
    suite.addTests(loader.loadTestsFromTestCase(TestHuffmanCoder))
    suite.addTests(loader.loadTestsFromTestCase(TestCommandLine))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
