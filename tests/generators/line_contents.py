import hypothesis.strategies as st

# Text of a single line, without any carriage return or line feed
line_texts = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs",), blacklist_characters="\r\n"
    ),
    max_size=20,
)

multibyte_line_texts = st.text(
    alphabet=st.sampled_from("aé€😀ß漢"),
    max_size=20,
)

chunk_sizes = st.integers(min_value=1, max_value=16)


@st.composite
def crlf_contents(draw, lines=line_texts):
    """
    :returns: Tuple of a list of lines and the utf-8 encoded contents
        of those lines terminated by b"\\r\\n", where the last line may
        be unterminated.
    """
    drawn_lines = draw(st.lists(lines, max_size=10))
    contents = b"".join(line.encode("utf-8") + b"\r\n" for line in drawn_lines)
    if draw(st.booleans()):
        last_line = draw(lines.filter(bool))
        drawn_lines.append(last_line)
        contents += last_line.encode("utf-8")
    return drawn_lines, contents
