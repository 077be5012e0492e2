"""PGN reading and writing for a single game.

Only the mainline survives a round trip: comments, variations and numeric
annotation glyphs are read past and never written.
"""

from __future__ import annotations

import re

from purechess.core.enums import GameResult
from purechess.core.errors import PGNParseError
from purechess.core.notation.models import ParsedPgn

PLIES_PER_LINE = 10

_RESULT_TOKENS: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "1-0",
    GameResult.BLACK_WINS: "0-1",
    GameResult.DRAW: "1/2-1/2",
    GameResult.IN_PROGRESS: "*",
}
_RESULTS_BY_TOKEN: dict[str, GameResult] = {v: k for k, v in _RESULT_TOKENS.items()}

_TAG_LINE_RE = re.compile(r'^\[(?P<key>\w+)\s+"(?P<value>(?:[^"\\]|\\.)*)"\]$')
_ESCAPE_RE = re.compile(r"\\(.)")

# One lexeme of movetext per match; the named group says what it is.
_MOVETEXT_RE = re.compile(
    r"""
      (?P<comment>\{[^}]*\}?|;[^\n]*)
    | (?P<open>\()
    | (?P<close>\))
    | (?P<nag>\$\d+)
    | (?P<word>[^\s{};()]+)
    """,
    re.VERBOSE,
)
_MOVE_NUMBER_RE = re.compile(r"^(?P<number>\d+)\.+(?P<rest>.*)$")


def pgn_result_token(result: GameResult) -> str:
    """PGN token for *result* (``*`` while the game is running)."""
    return _RESULT_TOKENS[result]


def game_result_from_pgn(token: str) -> GameResult:
    """Inverse of :func:`pgn_result_token`; unknown tokens mean in progress."""
    return _RESULTS_BY_TOKEN.get(token, GameResult.IN_PROGRESS)


# ── Writing ──────────────────────────────────────────────────────────────────


def _numbered(sans: list[str], first_ply: int = 0) -> list[str]:
    """Interleave move numbers: ``["e4", "e5"]`` → ``["1.", "e4", "e5"]``."""
    tokens: list[str] = []
    for ply, san in enumerate(sans, start=first_ply):
        if ply % 2 == 0:
            tokens.append(f"{ply // 2 + 1}.")
        tokens.append(san)
    return tokens


def pgn_movetext(sans: list[str], result_token: str) -> str:
    """Numbered movetext ending in *result_token*, ten plies per line."""
    lines: list[str] = []
    for start in range(0, len(sans), PLIES_PER_LINE):
        chunk = sans[start : start + PLIES_PER_LINE]
        lines.append(" ".join(_numbered(chunk, first_ply=start)))
    if lines:
        lines[-1] = f"{lines[-1]} {result_token}"
    else:
        lines.append(result_token)
    return "\n".join(lines)


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"')


def build_pgn(headers: dict[str, str], sans: list[str], result_token: str) -> str:
    """Tag pairs, a blank line, then the movetext; ends with a newline."""
    tag_lines = [f'[{key} "{_escape(value)}"]' for key, value in headers.items()]
    return "\n".join([*tag_lines, "", pgn_movetext(sans, result_token), ""])


# ── Reading ──────────────────────────────────────────────────────────────────


def _split_sections(pgn_text: str) -> tuple[dict[str, str], str]:
    headers: dict[str, str] = {}
    movetext: list[str] = []
    for line_no, raw_line in enumerate(pgn_text.splitlines(), start=1):
        line = raw_line.strip()
        if not movetext and line.startswith("["):
            match = _TAG_LINE_RE.match(line)
            if match is None:
                raise PGNParseError(f"Invalid header line: {line}", line=line_no)
            headers[match["key"]] = _ESCAPE_RE.sub(r"\1", match["value"])
        elif line and not line.startswith("%"):
            movetext.append(line)
    return headers, "\n".join(movetext)


def _mainline(movetext: str) -> tuple[list[str], str]:
    sans: list[str] = []
    result_token = "*"
    depth = 0
    for match in _MOVETEXT_RE.finditer(movetext):
        kind = match.lastgroup
        if kind == "open":
            depth += 1
        elif kind == "close":
            depth = max(0, depth - 1)
        elif kind == "word" and depth == 0:
            word = match.group()
            if word in _RESULTS_BY_TOKEN:
                result_token = word
                continue
            numbered = _MOVE_NUMBER_RE.match(word)
            if numbered is not None:
                word = numbered["rest"]
            if word:
                sans.append(word)
    return sans, result_token


def parse_pgn_game(pgn_text: str) -> ParsedPgn:
    """Split *pgn_text* into tag pairs, mainline SAN tokens and the result.

    Raises :class:`PGNParseError` for a malformed tag line. SAN tokens are
    not validated here; replaying them is the caller's job.
    """
    headers, movetext = _split_sections(pgn_text)
    sans, result_token = _mainline(movetext)
    if result_token == "*" and headers.get("Result") in _RESULTS_BY_TOKEN:
        result_token = headers["Result"]
    return ParsedPgn(headers=headers, sans=sans, result_token=result_token)
