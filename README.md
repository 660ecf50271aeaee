# corvid

Building blocks for small HTTP servers. The package uses only the standard
library.

- `corvid.cookies` provides `Cookie`, whose chainable builder renders a
  `Set-Cookie` value. It also provides `parse_cookie_header`, and a
  `CookieParser` middleware that reads a request's `Cookie` header into a
  `CookieContext`.
- `corvid.mustache_parser` splits a mustache template into literal fragments
  and tag actions. It handles sections, inverted sections, partials, comments,
  unescaped tags, delimiter changes and standalone-line whitespace, and it
  raises `InvalidTemplateError` for a malformed template.
- `corvid.sha1` is a streaming SHA-1 hasher.
- `corvid.encoding` encodes and decodes base64. It supports the standard and
  URL-safe alphabets and accepts unpadded input when decoding.
- `corvid.utility` sanitises filenames, generates random identifiers, joins
  paths, compares strings without regard to case, and trims whitespace.

## Install

    pip install .

To run the tests, install the test extra:

    pip install ".[test]"
    pytest

## Cookies

    from corvid.cookies import Cookie, SameSitePolicy

    cookie = Cookie("session", "token").path("/").max_age(3600).secure()
    cookie.same_site(SameSitePolicy.STRICT)
    print(cookie.dump())
    # session=token; Path=/; Secure; Max-Age=3600; SameSite=Strict

`expires()` takes either a `datetime` or a `time.struct_time`. An aware
`datetime` is converted to UTC first. `copy()` returns an independent copy of
the cookie.

`parse_cookie_header("a=1; b=\"two\"")` gives `{"a": "1", "b": "two"}`.
Names and values are trimmed, one pair of surrounding double quotes is
removed from a value, and the first occurrence of a name wins.

`CookieParser` is used in two steps:

    from corvid.cookies import CookieContext, CookieParser

    parser = CookieParser()
    ctx = CookieContext()
    parser.before_handle("theme=dark", ctx)   # the request's Cookie header value(s)
    ctx.get_cookie("theme")                   # "dark"; "" when absent
    ctx.set_cookie("lang", "en").path("/")
    parser.after_handle(ctx)                  # [("Set-Cookie", "lang=en; Path=/")]

If more than one `Cookie` header is passed to `before_handle`, it raises
`DuplicateCookieHeaderError`. That exception's `status` attribute is `400`.

## Template parsing

    from corvid.mustache_parser import parse

    parsed = parse("Hi {{name}}!")
    [parsed.tag_name(a) for a in parsed.actions]   # ["name", ""]

`ParsedTemplate.fragments[i]` is the `(start, end)` span of text that comes
before `actions[i]`. The last action is always an `IGNORE` placeholder. For
an opening or inverted block, `Action.pos` is the index of the matching
closing action. For a closing block, it is the index of the opening one. For
a standalone partial, it is the indentation in front of the tag.

## Hashing and encoding

    from corvid.sha1 import SHA1
    from corvid.encoding import base64encode_urlsafe, base64decode

    SHA1(b"abc").hexdigest()    # "a9993e364706816aba3e25717850c26c9cd0d89d"
    base64encode_urlsafe(b"\xfb\xff")   # "-_8="
    base64decode("aGk")         # b"hi"

`base64decode` accepts both alphabets. Any character outside them counts as
zero bits.

## Utilities

    from corvid.utility import sanitize_filename, random_alphanum

    sanitize_filename("CON.txt")   # "_.txt"
    random_alphanum(20)            # 20 characters from 0-9, a-z, A-Z

`sanitize_filename` does the following:

- cuts the name to 255 characters;
- replaces control characters and `?<>:*|"`;
- replaces a leading `/` or `\`;
- replaces `..` path components;
- replaces the reserved device names CON, PRN, AUX, NUL, COM1-9 and LPT1-9.

## What the package does not do

The package has no HTTP server, request router or command-line program. It
does not render templates: `corvid.mustache_parser` stops at the parsed
structure and does not look up values or load partials. It has no session
storage and no logging facility.