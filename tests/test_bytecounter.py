from progkit.bytecounter import ByteCounter


def test_write_bytes():
    c = ByteCounter()
    assert c.write(b"hello") == 5
    assert int(c) == 5


def test_print_into_counter():
    c = ByteCounter()
    name = "Dolly"
    print("hello, %s" % name, end="", file=c)
    assert int(c) == len("hello, Dolly")


def test_counts_accumulate():
    c = ByteCounter()
    c.write(b"ab")
    c.write(bytearray(b"cde"))
    assert int(c) == len(b"abcde")


def test_text_counted_as_utf8_bytes():
    c = ByteCounter()
    assert c.write("é") == 1
    assert int(c) == 2