from ethartifact.hash import function_selector, keccak256


def test_simple_keccak_hash():
    assert keccak256(bytes([0xEA])) == (
        b"\x2f\x20\x67\x74\x59\x12\x06\x77\x48\x4f\x71\x04\xc7\x6d\xeb\x68"
        b"\x46\xa2\xc0\x71\xf9\xb3\x15\x2c\x10\x3b\xb1\x2c\xd5\x4d\x1a\x4a"
    )


def test_keccak_of_empty_input():
    assert keccak256(b"").hex() == (
        "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
    )


def test_text_is_hashed_as_utf8():
    assert keccak256("Error(string)") == keccak256(b"Error(string)")
    assert len(keccak256("anything")) == 32


def test_simple_function_signature():
    assert function_selector("myMethod(uint256,string)") == bytes([0x24, 0xEE, 0x00, 0x97])


def test_revert_function_signature():
    assert function_selector("Error(string)") == bytes([0x08, 0xC3, 0x79, 0xA0])


def test_selector_is_hash_prefix():
    sig = "transfer(address,uint256)"
    assert function_selector(sig) == keccak256(sig)[:4]