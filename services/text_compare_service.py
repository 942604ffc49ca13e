# services/text_compare_service.py
"""
Grading for the listen & type exercise: tolerant equality between what the
learner typed and the reference answer, plus a word-level diff for feedback.
"""
import re
import unicodedata
from typing import List

from schemas.text_compare import DiffToken

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_NOT_WORD_CHAR = re.compile(r"[^a-z0-9'\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize(s: str) -> str:
    """
    Canonical form for comparison: lowercase, accents stripped, punctuation
    turned into spaces, whitespace collapsed. Apostrophes are kept so
    contractions stay intact ("it's" != "its").
    """
    text = unicodedata.normalize("NFKD", s.lower())
    text = _COMBINING_MARKS.sub("", text)
    text = _NOT_WORD_CHAR.sub(" ", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def is_correct(user: str, answer: str) -> bool:
    return normalize(user) == normalize(answer)


def word_count(answer: str) -> int:
    """Number of words in the normalized reference."""
    return len(normalize(answer).split())


def diff_words(a: str, b: str) -> List[DiffToken]:
    """
    Word-level LCS diff of the user's input `a` against the answer `b`.

    Tokens are compared raw, so typos show up as delete/insert pairs.
    `delete` marks words only in `a`, `insert` words only in `b`. When two
    alignments are equally long, the user's word is consumed first.
    """
    A = a.split()
    B = b.split()
    m, n = len(A), len(B)

    # dp[i][j] = LCS length of A[i:] and B[j:]
    dp = [[0] * (n + 1) for _ in range(m + 1)]
    for i in range(m - 1, -1, -1):
        for j in range(n - 1, -1, -1):
            if A[i] == B[j]:
                dp[i][j] = dp[i + 1][j + 1] + 1
            else:
                dp[i][j] = max(dp[i + 1][j], dp[i][j + 1])

    out: List[DiffToken] = []
    i = j = 0
    while i < m and j < n:
        if A[i] == B[j]:
            out.append(DiffToken(text=A[i], type="equal"))
            i += 1
            j += 1
        elif dp[i + 1][j] >= dp[i][j + 1]:
            out.append(DiffToken(text=A[i], type="delete"))
            i += 1
        else:
            out.append(DiffToken(text=B[j], type="insert"))
            j += 1

    out.extend(DiffToken(text=token, type="delete") for token in A[i:])
    out.extend(DiffToken(text=token, type="insert") for token in B[j:])
    return out
