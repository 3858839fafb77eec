from fitmark.tokenizer import clean_tokens, tokenize


def test_tokenize_lowercases_and_drops_single_chars():
    assert tokenize("Hello, World! a b-c") == ["hello", "world"]


def test_tokenize_blank_input():
    assert tokenize("") == []
    assert tokenize("   \n") == []


def test_clean_tokens_removes_short_and_stop_words():
    tokens = ["the", "cat", "sat", "on", "mat", "xx", "which", "The"]
    assert clean_tokens(tokens) == ["cat", "sat", "mat"]
