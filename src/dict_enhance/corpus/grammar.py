"""Structural grammar of a dictionary entry.

An entry in the Kobo Japanese dictionary looks like::

    <a name="たべる" /><b>たべる</b>〔annotation〕【食べる】<p>definition ...

The head is described by an ordered table of anchored fragments. Supporting a
new markup variant means editing :data:`HEAD_GRAMMAR`; entries the compiled
pattern does not match are passed through untouched.
"""
from __future__ import annotations

import re
from typing import Tuple

from dict_enhance.glossary.stack import PARAGRAPH_BREAK

ANCHOR = '<a name="'
VARIANT_SEPARATOR = "／"

# hiragana, katakana, CJK ideographs, CJK punctuation, full-width forms
# (which include （ ） ／), katakana extensions, enclosed CJK, radicals and
# the supplementary-plane ideographs (extension B onward, compatibility supplement)
VARIANT_CHARS = (
    "\u3040-\u309f"
    "\u30a0-\u30ff"
    "\u3400-\u4dbf"
    "\u4e00-\u9fff"
    "\uf900-\ufaff"
    "\u3000-\u303f"
    "\uff01-\uff5e"
    "\u31f0-\u31ff"
    "\u3220-\u3243"
    "\u3280-\u337f"
    "\u2e80-\u2fdf"
    "\U00020000-\U0003134f"
    "\U0002f800-\U0002fa1f"
)

HEAD_GRAMMAR: Tuple[Tuple[str, str], ...] = (
    # anchor tag; inline image placeholders may sit before its close
    ("anchor", r'<a name="(?P<headword>[^"]*)"(?:[^<>]|<img[^>]*>)*?/>'),
    # optional: some entries carry no bold reading, reading is then ""
    ("reading", r"(?:<b>(?P<reading>.*?)</b>)?"),
    ("annotation", r"(?:〔(?P<annotation>.*?)〕)?"),
    ("variants", r"(?:【(?P<variants>[" + VARIANT_CHARS + r"]*?)】)?"),
    ("lead", r"(?P<lead>.*?)"),
    ("paragraph", re.escape(PARAGRAPH_BREAK)),
)

HEAD_PATTERN = re.compile("".join(fragment for _, fragment in HEAD_GRAMMAR), re.DOTALL)
HEADWORD_PATTERN = re.compile(r'<a name="(?P<headword>[^"]*)"')
