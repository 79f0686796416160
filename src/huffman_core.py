# filename: huffman_core.py

import heapq
import logging
from collections import Counter, namedtuple

from bitarray import bitarray

from huffman_errors import EmptyInputError

logger = logging.getLogger(__name__)

# Internal nodes are ordered after every possible leaf symbol.
FIRST_INTERNAL_ORDER = 256

TreeStats = namedtuple("TreeStats", "leaves internal depth weight")


class Leaf:
    __slots__ = ("symbol", "weight")

    def __init__(self, symbol, weight):
        self.symbol = symbol
        self.weight = weight

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.weight})"


class Internal:
    __slots__ = ("weight", "left", "right")

    def __init__(self, weight, left, right):
        self.weight = weight
        self.left = left
        self.right = right

    def __repr__(self):
        return f"Internal({self.weight}, {self.left!r}, {self.right!r})"


def is_leaf(node):
    return isinstance(node, Leaf)


class HuffmanLogic:
    """Frequency analysis, tree construction and code derivation.

    Trees are rebuilt from counts alone, so construction must be fully
    deterministic: the heap is keyed by ``(weight, order)`` where a leaf's
    order is its symbol and an internal node's order is
    ``256 + creation index``. Equal weights resolve to the lower symbol
    first, and the first node popped becomes the left child.
    """

    def build_frequency_table(self, data):
        # Frequency analysis of the input byte data
        return Counter(data)

    def build_tree(self, freqs, leaves=None):
        """Build the Huffman tree for ``freqs`` and return its root.

        When ``leaves`` is a dict it is filled with symbol -> Leaf. A table
        with a single symbol yields that Leaf as the root.
        """
        if not freqs:
            raise EmptyInputError("cannot build a tree from an empty frequency table")

        priority_queue = []
        for symbol in sorted(freqs):
            leaf = Leaf(symbol, freqs[symbol])
            if leaves is not None:
                leaves[symbol] = leaf
            priority_queue.append((leaf.weight, symbol, leaf))
        heapq.heapify(priority_queue)

        # Iteratively merge the two lightest nodes
        order = FIRST_INTERNAL_ORDER
        while len(priority_queue) > 1:
            left_weight, _, left = heapq.heappop(priority_queue)
            right_weight, _, right = heapq.heappop(priority_queue)
            weight = left_weight + right_weight
            heapq.heappush(priority_queue, (weight, order, Internal(weight, left, right)))
            order += 1

        root = priority_queue[0][2]
        logger.debug("built tree: %d symbols, root weight %d", len(freqs), root.weight)
        return root

    def code_for(self, root, symbol):
        """Return the root-to-leaf path of ``symbol`` as a bitarray.

        A root that is itself a leaf has no edges; its symbol gets the
        one-bit code ``0``.
        """
        if is_leaf(root):
            if root.symbol != symbol:
                raise LookupError(f"symbol {symbol} is not in the tree")
            return bitarray("0", endian="big")

        stack = [(root, bitarray(endian="big"))]
        while stack:
            node, path = stack.pop()
            if is_leaf(node):
                if node.symbol == symbol:
                    return path
                continue
            stack.append((node.right, path + bitarray("1")))
            stack.append((node.left, path + bitarray("0")))
        raise LookupError(f"symbol {symbol} is not in the tree")

    def generate_codes(self, root):
        """Map every symbol in the tree to its code in one traversal."""
        if is_leaf(root):
            return {root.symbol: bitarray("0", endian="big")}

        codes = {}
        stack = [(root, bitarray(endian="big"))]
        while stack:
            node, path = stack.pop()
            if is_leaf(node):
                codes[node.symbol] = path
                continue
            stack.append((node.right, path + bitarray("1")))
            stack.append((node.left, path + bitarray("0")))
        return codes

    def code_lengths(self, root):
        return {symbol: len(code) for symbol, code in self.generate_codes(root).items()}

    def tree_stats(self, root):
        leaves = internal = depth = 0
        stack = [(root, 0)]
        while stack:
            node, level = stack.pop()
            depth = max(depth, level)
            if is_leaf(node):
                leaves += 1
            else:
                internal += 1
                stack.append((node.left, level + 1))
                stack.append((node.right, level + 1))
        return TreeStats(leaves, internal, depth, root.weight)
