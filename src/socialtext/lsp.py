"""Minimal LSP server — hyperlinks as document links, hashtag/mention completion."""

from __future__ import annotations

import logging
import re
import sys
from collections import Counter
from pathlib import Path

from lsprotocol.types import (
    INITIALIZED,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_LINK,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentLink,
    DocumentLinkParams,
    InitializedParams,
    Position,
    Range,
    TextDocumentContentChangePartial,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer
from pygls.workspace import PositionCodec, ServerTextPosition

from socialtext import __version__
from socialtext.buffer import StyledBuffer
from socialtext.config import SocialConfig, discover_config
from socialtext.errors import ColorAttributeNotFoundError, ConfigError, PatternError
from socialtext.suggestions import Hashtag, Mention, filter_suggestions
from socialtext.tokens import Category
from socialtext.view import SocialView

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)
# The only line breaks LSP recognises.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class DocumentStore:
    """One styled buffer and view per open document."""

    def __init__(self, config: SocialConfig | None = None) -> None:
        self.config = config if config is not None else SocialConfig()
        self._views: dict[str, SocialView] = {}
        self._partials: dict[str, tuple[Category, str]] = {}
        # Client column units; replaced by the negotiated encoding on initialize.
        self.position_codec = PositionCodec()

    def open(self, uri: str, text: str) -> SocialView:
        view = SocialView.from_config(StyledBuffer(text), self.config)
        for category in (Category.HASHTAG, Category.MENTION):
            view.set_partial_listener(category, self._partial_recorder(uri))
        self._views[uri] = view
        return view

    def _partial_recorder(self, uri: str):
        def record(category: Category, partial: str) -> None:
            self._partials[uri] = (category, partial)

        return record

    def view(self, uri: str) -> SocialView | None:
        return self._views.get(uri)

    def close(self, uri: str) -> None:
        view = self._views.pop(uri, None)
        self._partials.pop(uri, None)
        if view is not None:
            view.detach()

    def change(self, uri: str, params: DidChangeTextDocumentParams) -> None:
        """Replay content changes into the document's buffer, in order."""
        view = self._views.get(uri)
        if view is None:
            logger.warning("change for unopened document %s", uri)
            return
        buffer = view.surface
        for change in params.content_changes:
            self._partials.pop(uri, None)
            if isinstance(change, TextDocumentContentChangePartial):
                start = _offset_at(buffer.text, change.range.start, self.position_codec)
                end = _offset_at(buffer.text, change.range.end, self.position_codec)
                buffer.replace(start, end, change.text)
            else:
                buffer.set_text(change.text)

    def partial(self, uri: str) -> tuple[Category, str] | None:
        return self._partials.get(uri)

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    def links(self, uri: str) -> list[DocumentLink]:
        view = self._views.get(uri)
        if view is None:
            return []
        text = view.surface.text
        links = []
        for tok in view.tokens():
            if tok.category != Category.HYPERLINK:
                continue
            target = tok.payload if _SCHEME.match(tok.payload) else f"http://{tok.payload}"
            rng = _range(text, tok.start, tok.end, self.position_codec)
            links.append(DocumentLink(range=rng, target=target))
        return links

    def complete(self, uri: str) -> CompletionList:
        view = self._views.get(uri)
        items: list[CompletionItem] = []
        if view is None:
            return CompletionList(is_incomplete=False, items=items)

        partial = self._partials.get(uri)
        if view.is_editing(Category.HASHTAG):
            prefix = partial[1] if partial and partial[0] == Category.HASHTAG else ""
            counts = Counter(view.hashtags())
            tags = [Hashtag(name, count) for name, count in counts.items()]
            for tag in filter_suggestions(tags, prefix):
                items.append(
                    CompletionItem(
                        label=tag.name,
                        kind=CompletionItemKind.Keyword,
                        detail=f"#{tag.name} ({tag.count} use{'s' if tag.count != 1 else ''})",
                    )
                )
        elif view.is_editing(Category.MENTION):
            prefix = partial[1] if partial and partial[0] == Category.MENTION else ""
            mentions = [Mention(name) for name in dict.fromkeys(view.mentions())]
            for mention in filter_suggestions(mentions, prefix):
                items.append(
                    CompletionItem(
                        label=mention.username,
                        kind=CompletionItemKind.Reference,
                        detail=mention.display_name or f"@{mention.username}",
                    )
                )
        return CompletionList(is_incomplete=False, items=items)


def _lines(text: str) -> list[str]:
    """Split text into lines at LSP line breaks, keeping the breaks."""
    lines = []
    start = 0
    for match in _LINE_BREAK.finditer(text):
        lines.append(text[start : match.end()])
        start = match.end()
    if start < len(text):
        lines.append(text[start:])
    return lines


def _offset_at(text: str, position: Position, codec: PositionCodec) -> int:
    """Convert a client line/character position into a buffer offset."""
    lines = _lines(text)
    if position.line >= len(lines):
        return len(text)
    # The codec may clamp the character in place; keep the client's position intact.
    client = Position(line=position.line, character=position.character)
    server_position = codec.position_from_client_units(lines, client)
    return sum(len(line) for line in lines[: server_position.line]) + server_position.character


def _server_position(lines: list[str], offset: int) -> ServerTextPosition:
    remaining = offset
    for lineno, line in enumerate(lines):
        if remaining < len(line) or (remaining == len(line) and not line.endswith(("\r", "\n"))):
            return ServerTextPosition(lineno, remaining)
        remaining -= len(line)
    return ServerTextPosition(len(lines), 0)


def _range(text: str, start: int, end: int, codec: PositionCodec) -> Range:
    """Convert buffer offsets into a range in client units."""
    lines = _lines(text)
    return Range(
        start=codec.position_to_client_units(lines, _server_position(lines, start)),
        end=codec.position_to_client_units(lines, _server_position(lines, end)),
    )


server = LanguageServer(
    "socialtext-lsp", __version__, text_document_sync_kind=TextDocumentSyncKind.Incremental
)
documents = DocumentStore()


@server.feature(INITIALIZED)
def initialized(ls: LanguageServer, params: InitializedParams) -> None:
    documents.position_codec = ls.workspace.position_codec


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    documents.open(params.text_document.uri, params.text_document.text)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    documents.change(params.text_document.uri, params)


@server.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: LanguageServer, params: DidCloseTextDocumentParams) -> None:
    documents.close(params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DOCUMENT_LINK)
def document_link(ls: LanguageServer, params: DocumentLinkParams) -> list[DocumentLink]:
    return documents.links(params.text_document.uri)


@server.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["#", "@"]))
def completion(ls: LanguageServer, params: CompletionParams) -> CompletionList:
    return documents.complete(params.text_document.uri)


def main() -> None:
    # stdout carries the protocol; logs go to stderr.
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        documents.config = discover_config(Path.cwd())
    except (ConfigError, PatternError, ColorAttributeNotFoundError) as exc:
        logger.error("ignoring invalid configuration:\n%s", exc)
    if documents.config.debug:
        logging.getLogger("socialtext").setLevel(logging.DEBUG)
    server.start_io()
