from collections import Counter, namedtuple
import heapq
import logging
import math

log = logging.getLogger(__name__)


class Leaf:
    __slots__ = ("symbol", "weight")

    def __init__(self, symbol, weight: int):
        self.symbol = symbol
        self.weight = weight


class Branch:
    __slots__ = ("weight", "left", "right")

    def __init__(self, left, right):
        self.weight = left.weight + right.weight
        self.left = left
        self.right = right


class Singleton:
    """Gốc của cây khi dữ liệu chỉ có một loại ký tự."""
    __slots__ = ("weight", "child")

    def __init__(self, child: Leaf):
        self.weight = child.weight
        self.child = child


class MissingCodeError(KeyError):
    """Ký tự không có trong bảng mã (bảng mã phải sinh từ chính văn bản đó)."""


class CompressionResult(namedtuple("CompressionResult", "encoded_text code_table")):
    __slots__ = ()

    def to_dict(self):
        return {"encodedText": self.encoded_text, "codeTable": dict(self.code_table)}


def build_frequency_map(text) -> Counter:
    """
    Đếm tần suất xuất hiện của từng ký tự.
    Thứ tự khóa là thứ tự xuất hiện đầu tiên.
    """
    return Counter(text)


def build_tree(frequencies):
    """
    Xây dựng cây Huffman từ bảng tần suất.

    Heap chứa (weight, seq, node): khi trọng số bằng nhau, nút được chèn
    trước sẽ được lấy ra trước, nên cây luôn giống nhau giữa các lần chạy.
    """
    if not frequencies:
        raise ValueError("cannot build a Huffman tree from an empty frequency map")

    heap = []
    seq = 0
    for symbol, weight in frequencies.items():
        heap.append((weight, seq, Leaf(symbol, weight)))
        seq += 1
    heapq.heapify(heap)

    # Nếu dữ liệu chỉ có 1 loại ký tự
    if len(heap) == 1:
        return Singleton(heap[0][2])

    while len(heap) > 1:
        _, _, lo = heapq.heappop(heap)
        _, _, hi = heapq.heappop(heap)
        merged = Branch(lo, hi)
        heapq.heappush(heap, (merged.weight, seq, merged))
        seq += 1

    return heap[0][2]


def generate_codes(root) -> dict:
    """
    Duyệt cây Huffman và sinh bảng mã nhị phân (trái = '0', phải = '1').
    """
    codebook = {}
    stack = [(root, "")]
    while stack:
        node, prefix = stack.pop()
        if isinstance(node, Leaf):
            # Mã rỗng không giải mã được, gán "0"
            codebook[node.symbol] = prefix or "0"
        elif isinstance(node, Singleton):
            stack.append((node.child, prefix + "0"))
        else:
            # đẩy nhánh phải trước để nhánh trái được duyệt trước
            stack.append((node.right, prefix + "1"))
            stack.append((node.left, prefix + "0"))
    return codebook


def encode_text(text, code_table) -> str:
    try:
        return "".join(code_table[ch] for ch in text)
    except KeyError as e:
        raise MissingCodeError(e.args[0]) from None


def invert_code_table(code_table) -> dict:
    # Mã trùng nhau: giữ ký tự được duyệt sau cùng
    return {code: symbol for symbol, code in code_table.items()}


def decode_text(encoded_text, code_table) -> str:
    """
    Giải mã chuỗi bit bằng bảng mã đảo ngược.

    Lấy khớp ngắn nhất từ trái sang phải, không quay lui. Các bit thừa ở cuối
    không khớp mã nào sẽ bị bỏ qua.
    """
    if not encoded_text or not code_table:
        return ""

    rev = invert_code_table(code_table)

    result = []
    buf = ""
    for bit in encoded_text:
        buf += bit
        if buf in rev:
            result.append(rev[buf])
            buf = ""
    if buf:
        log.debug("discarding %d trailing bit(s) that match no code", len(buf))
    return "".join(result)


def compress(text) -> CompressionResult:
    """
    Nén văn bản bằng Huffman.
    Trả về: CompressionResult(chuỗi_bit, bảng_mã)
    """
    if not text:
        return CompressionResult("", {})

    freq = build_frequency_map(text)
    tree = build_tree(freq)
    codes = generate_codes(tree)
    encoded = encode_text(text, codes)
    log.debug("compressed %d symbol(s) over %d distinct into %d bit(s)",
              len(text), len(codes), len(encoded))
    return CompressionResult(encoded, codes)


def decompress(encoded_text, code_table) -> str:
    return decode_text(encoded_text, code_table)


def compression_stats(text, encoded_text) -> dict:
    original_size = len(text.encode("utf-8"))
    # mỗi ký tự '0'/'1' là một bit
    compressed_size = math.ceil(len(encoded_text) / 8)
    ratio = round(compressed_size / original_size * 100, 2) if original_size else 0
    return {
        "originalSize": original_size,
        "compressedSize": compressed_size,
        "compressionRatio": ratio,
    }
