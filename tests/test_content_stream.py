from dapwire.content_stream import ContentReader, ContentWriter, OnInvalidData
from dapwire.io import Reader, StringBuffer


class SingleByteReader(Reader):
    """Returns a single byte per read, whatever size is asked for."""

    def __init__(self, inner):
        self.inner = inner

    def is_open(self):
        return self.inner.is_open()

    def close(self):
        self.inner.close()

    def read(self, size):
        return self.inner.read(1)


def _garbage_buffer():
    sb = StringBuffer()
    sb.write("Content-Length: 26\r\n\r\nContent payload number one")
    sb.write("some unrecognised garbage")
    sb.write("Content-Length: 26\r\n\r\nContent payload number two")
    sb.write("some more unrecognised garbage")
    sb.write("Content-Length: 28\r\n\r\nContent payload number three")
    return sb


def test_write():
    sb = StringBuffer()
    cw = ContentWriter(sb)
    cw.write("Content payload number one")
    cw.write("Content payload number two")
    cw.write("Content payload number three")
    assert sb.contents() == (
        b"Content-Length: 26\r\n\r\nContent payload number one"
        b"Content-Length: 26\r\n\r\nContent payload number two"
        b"Content-Length: 28\r\n\r\nContent payload number three"
    )


def test_read():
    cs = ContentReader(_garbage_buffer())
    assert cs.read() == "Content payload number one"
    assert cs.read() == "Content payload number two"
    assert cs.read() == "Content payload number three"
    assert cs.read() == ""


def test_short_read():
    cs = ContentReader(SingleByteReader(_garbage_buffer()))
    assert cs.read() == "Content payload number one"
    assert cs.read() == "Content payload number two"
    assert cs.read() == "Content payload number three"
    assert cs.read() == ""


def test_partial_read_and_parse():
    sb = StringBuffer()
    sb.write("Content")
    sb.write("-Length: ")
    sb.write("26")
    sb.write("\r\n\r\n")
    sb.write("Content payload number one")
    cs = ContentReader(sb)
    assert cs.read() == "Content payload number one"
    assert cs.read() == ""


def test_http_request():
    part1 = (
        "POST / HTTP/1.1\r\n"
        "Host: localhost:8001\r\n"
        "Connection: keep-alive\r\n"
        "Content-Length: 99\r\n"
    )
    part2 = (
        "Pragma: no-cache\r\n"
        "Cache-Control: no-cache\r\n"
        "Content-Type: text/plain;charset=UTF-8\r\n"
        "Accept: */*\r\n"
        "Origin: null\r\n"
        "Sec-Fetch-Site: cross-site\r\n"
        "Sec-Fetch-Mode: cors\r\n"
        "Sec-Fetch-Dest: empty\r\n"
        "Accept-Encoding: gzip, deflate, br\r\n"
        "Accept-Language: en-US,en;q=0.9\r\n"
        "\r\n"
        '{"type":"request","command":"launch","arguments":{"cmd":"/'
        "bin/sh -c 'echo remote code execution'\"}}"
    )
    sb = StringBuffer()
    sb.write(part1)
    sb.write(part2)
    cr = ContentReader(sb, OnInvalidData.CLOSE)
    assert cr.read() == ""
    assert not cr.is_open()


def test_close_mode_accepts_valid_message():
    sb = StringBuffer()
    ContentWriter(sb).write("Content payload number one")
    cr = ContentReader(sb, OnInvalidData.CLOSE)
    assert cr.read() == "Content payload number one"
    assert cr.is_open()


def test_missing_separator_closes_in_close_mode():
    sb = StringBuffer()
    sb.write("Content-Length: 26\nContent payload number one")
    cr = ContentReader(sb, OnInvalidData.CLOSE)
    assert cr.read() == ""
    assert not cr.is_open()


def test_missing_separator_ignored_in_ignore_mode():
    sb = StringBuffer()
    sb.write("Content-Length: 26\nContent payload number one")
    cr = ContentReader(sb)
    assert cr.read() == ""
    assert cr.is_open()


def test_round_trip_unicode():
    sb = StringBuffer()
    message = '{"name":"\u00e9l\u00e8ve"}'
    assert ContentWriter(sb).write(message)
    assert ContentReader(sb).read() == message


def test_writer_to_closed_stream():
    sb = StringBuffer()
    cw = ContentWriter(sb)
    cw.close()
    assert not cw.is_open()
    assert cw.write("Content payload number one") is False