from flagwork.parser.tokens import TokenKind, TokenStream, classify


def test_classify():
    assert classify("--name") == (TokenKind.LONG_FLAG, "name")
    assert classify("-n") == (TokenKind.SHORT_FLAG, "n")
    assert classify("greet") == (TokenKind.BAREWORD, "greet")
    assert classify("-") == (TokenKind.SHORT_FLAG, "")
    assert classify("--") == (TokenKind.LONG_FLAG, "")


def test_stream_skips_blank_tokens():
    stream = TokenStream(["", "  ", "--a", "\t", "b"])
    assert [token.text for token in stream] == ["--a", "b"]


def test_stream_splits_on_first_equals():
    stream = TokenStream(["--name=John=Doe"])
    tokens = list(stream)
    assert [(token.text, token.attached) for token in tokens] == [
        ("--name", False),
        ("John=Doe", True),
    ]


def test_stream_split_keeps_empty_value():
    tokens = list(TokenStream(["--verbose="]))
    assert [(token.text, token.attached) for token in tokens] == [
        ("--verbose", False),
        ("", True),
    ]


def test_stream_does_not_mutate_caller_list():
    args = ["--name=John", "greet"]
    stream = TokenStream(args)
    list(stream)
    assert args == ["--name=John", "greet"]
    assert len(stream) == 3


def test_consumed_value_is_not_split_or_scanned():
    stream = TokenStream(["--query", "a=b", "--next"])
    seen = []
    for token in stream:
        seen.append(token.text)
        if token.text == "--query":
            value = stream.consume()
            assert value.text == "a=b"
            assert not value.attached
    assert seen == ["--query", "--next"]


def test_peek_value():
    stream = TokenStream(["--port", "80"])
    iterator = iter(stream)
    next(iterator)
    assert stream.peek_value().text == "80"
    stream.consume()
    assert stream.peek_value() is None
    assert stream.remaining() == []
