"""Textual host adapter: key decoding and state relay, no drawing."""

from .controller import TextualEditorAdapter, TextualUIHooks
from .keys import decode_key, key_from_event

__all__ = ["TextualEditorAdapter", "TextualUIHooks", "decode_key", "key_from_event"]
