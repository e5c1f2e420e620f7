"""Prompt templates for generating content ideas and scripts."""

from __future__ import annotations

import json
import textwrap
from enum import Enum


class BookNiche(str, Enum):
    """Book categories with their own content guidelines."""

    CHILDREN = "children"
    PUZZLES = "puzzles"
    SAVINGS = "savings"
    DIALECT_PUZZLES = "dialect_puzzles"


def _bullets(items) -> str:
    return "\n".join(f"- {item}" for item in items)


def _numbered(items) -> str:
    return "\n".join(f"{number}. {item}" for number, item in enumerate(items, 1))


def _labelled(pairs) -> list[str]:
    return [f"{label}: {text}" for label, text in pairs]


# Each niche: the audience named in the heading, then the suggested themes.
_NICHES: dict[BookNiche, tuple[str, tuple[str, ...]]] = {
    BookNiche.CHILDREN: (
        "libri per bambini",
        (
            "Mostra momenti divertenti di lettura con i bambini",
            "Behind-the-scenes della creazione delle illustrazioni",
            "Consigli educativi per genitori",
            "Tutorial creativi ispirati al libro",
            "Storie animate delle pagine del libro",
            "Testimonianze di genitori e bambini",
        ),
    ),
    BookNiche.PUZZLES: (
        "libri di enigmistica",
        (
            "Sfide e quiz interattivi dal libro",
            "Time-lapse di risoluzione enigmi",
            "Curiosità e trucchi per enigmisti",
            'Confronti "prima vs dopo" della mente',
            "Mini-sfide con premio (engagement)",
            "Spiegazione di enigmi particolarmente difficili",
        ),
    ),
    BookNiche.DIALECT_PUZZLES: (
        "enigmistica in dialetto milanese",
        (
            "Parole milanesi dimenticate con spiegazioni divertenti",
            "Confronto dialetto vs italiano standard",
            "Quiz su modi di dire milanesi",
            "Storielle brevi in dialetto",
            "Nostalgia e tradizioni milanesi",
            "Coinvolgimento community milanese",
        ),
    ),
    BookNiche.SAVINGS: (
        "libri sul risparmio",
        (
            "Tips pratici di risparmio giornaliero",
            "Testimonianze di successo",
            "Sfide di risparmio da provare",
            "Errori comuni da evitare",
            "Trucchi psicologici per risparmiare",
            "Confronto spesa prima/dopo consigli del libro",
        ),
    ),
}

_CATEGORIES = (
    ("EDUCATIONAL", "insegna qualcosa di utile"),
    ("ENTERTAINMENT", "diverte e intrattiene"),
    ("BTS (Behind-The-Scenes)", "mostra il processo creativo"),
    ("UGC (User Generated Content)", "coinvolge gli utenti"),
    ("TREND", "cavalca trend attuali di TikTok/Instagram"),
)

_IDEA_FIELDS = (
    "Tipo (educational/entertainment/bts/ugc/trend)",
    "Titolo accattivante (max 10 parole)",
    "Descrizione breve (2-3 frasi)",
    "Hook iniziale suggerito",
    "CTA finale suggerito",
    "Punteggio rilevanza 0-100",
)

_IDEA_EXAMPLE = {
    "type": "educational",
    "title": "Titolo idea",
    "description": "Descrizione dettagliata dell'idea",
    "hook": "Hook iniziale per catturare attenzione",
    "cta": "Call-to-action finale",
    "relevance_score": 85,
}


def _idea_categories() -> str:
    example = textwrap.indent(json.dumps(_IDEA_EXAMPLE, indent=2, ensure_ascii=False), "  ")
    return (
        "\nCATEGORIE di contenuto (distribuisci equamente):\n"
        + _numbered(_labelled(_CATEGORIES))
        + "\n\nPer ogni idea, fornisci:\n"
        + _numbered(_IDEA_FIELDS)
        + "\n\nFormato risposta (JSON array):\n[\n"
        + example
        + ",\n  ...\n]"
    )


_PLATFORMS: dict[str, tuple[str, tuple[tuple[str, str], ...]]] = {
    "tiktok": (
        "TIKTOK",
        (
            ("Durata", "15-60 secondi"),
            ("Hook", "primi 3 secondi CRITICI"),
            ("Ritmo", "veloce, dinamico"),
            ("Formato", "verticale 9:16"),
            ("Trend", "usa musiche popolari"),
            ("Hashtag", "3-5 rilevanti + 2-3 di nicchia"),
        ),
    ),
    "instagram": (
        "INSTAGRAM REELS",
        (
            ("Durata", "15-90 secondi"),
            ("Hook", "primi 3 secondi CRITICI"),
            ("Ritmo", "medio-veloce"),
            ("Formato", "verticale 9:16"),
            ("Audio", "trending o originale"),
            ("Hashtag", "5-10 misti (popolari + nicchia)"),
        ),
    ),
}

# Script sections: heading, optional intro line, bullet points.
_SCRIPT_SECTIONS: tuple[tuple[str, str | None, tuple[str, ...]], ...] = (
    (
        "HOOK (3-5 secondi)",
        "La frase/domanda che ferma lo scroll. Deve essere:",
        ("Provocatoria o curiosa", "Relazionabile al target", "Chiara e diretta"),
    ),
    (
        "CONTENUTO PRINCIPALE (25-45 secondi)",
        None,
        (
            "Sviluppa l'idea in 3-5 punti chiave",
            "Linguaggio semplice e diretto",
            'Usa "tu" per parlare direttamente al viewer',
            "Include dettagli specifici e concreti",
        ),
    ),
    (
        "CTA (5-10 secondi)",
        None,
        (
            "Invito all'azione chiaro",
            "Perché dovrebbero comprare il libro",
            "Dove trovarlo (link in bio)",
        ),
    ),
    (
        "EXTRA",
        None,
        (
            "5-8 hashtag strategici",
            "Suggerimento musica/audio trending",
            "Note per il montaggio video",
        ),
    ),
)


def _text(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


_SCRIPT_EXAMPLE = (
    ("hook", _text("Hook text qui")),
    ("main_content", _text("Contenuto principale qui (separato in paragrafi)")),
    ("cta", _text("CTA text qui")),
    ("hashtags", '["#tag1", "#tag2", ...]'),
    ("music_suggestion", _text("Nome traccia/audio trending")),
    ("video_notes", _text("Note per editing e montaggio")),
    ("estimated_length", "45"),
)


def _script_example() -> str:
    body = ",\n".join(f'  "{key}": {value}' for key, value in _SCRIPT_EXAMPLE)
    return "{\n" + body + "\n}"


def _render_section(heading: str, intro: str | None, points: tuple[str, ...]) -> str:
    lines = [f"**{heading}**"]
    if intro:
        lines.append(intro)
    lines.append(_bullets(points))
    return "\n".join(lines)


_TYPE_SCORES = {
    "children": {"educational": 20, "entertainment": 15, "bts": 10, "ugc": 15, "trend": 10},
    "puzzles": {"educational": 15, "entertainment": 20, "bts": 5, "ugc": 20, "trend": 15},
    "savings": {"educational": 25, "entertainment": 10, "bts": 10, "ugc": 15, "trend": 10},
}

_BASE_SCORE = 50
_BOOK_REFERENCE_BONUS = 10
_MAX_SCORE = 100


def _niche_guidelines(niche: BookNiche | str) -> str:
    try:
        subject, points = _NICHES[BookNiche(niche)]
    except ValueError:
        return ""
    return f"\nLINEE GUIDA per {subject}:\n" + _bullets(points)


def _platform_specs(platform: str) -> str:
    spec = _PLATFORMS.get(platform)
    if spec is None:
        return ""
    title, points = spec
    return f"\nSPECIFICHE {title}:\n" + _bullets(_labelled(points))


def idea_prompt(
    book_title: str,
    genre: str,
    target_audience: str,
    niche: BookNiche | str,
    count: int,
) -> str:
    """Build the prompt asking for ``count`` content ideas for a book."""
    base = "\n".join(
        [
            "Sei un esperto di social media marketing per libri self-published su Amazon KDP.",
            "",
            f'Il libro: "{book_title}"',
            f"Genere: {genre}",
            f"Target: {target_audience}",
            "",
            f"Devi generare {count} idee creative per contenuti TikTok/Instagram Reels "
            "che promuovano questo libro.",
        ]
    )
    return base + "\n" + _niche_guidelines(niche) + "\n" + _idea_categories()


def script_prompt(idea: str, book_title: str, platform: str) -> str:
    """Build the prompt turning an idea into a video script for a platform."""
    parts = [
        "Sei un copywriter esperto di TikTok e Instagram Reels.",
        f'Idea da trasformare in script:\n"{idea}"',
        f'Libro promosso: "{book_title}"\nPlatform: {platform}',
        _platform_specs(platform),
        "Crea uno script completo strutturato così:",
        *(_render_section(*section) for section in _SCRIPT_SECTIONS),
        "Formato risposta (JSON):\n" + _script_example(),
    ]
    return "\n\n".join(parts)


def calculate_relevance_score(
    idea_type: str,
    book_genre: str,
    has_book_reference: bool,
    trend_alignment: int,
) -> int:
    """Score an idea's relevance: base score plus genre fit, book reference
    and trend alignment, capped at 100."""
    score = _BASE_SCORE
    score += _TYPE_SCORES.get(book_genre.lower(), {}).get(idea_type, 0)
    if has_book_reference:
        score += _BOOK_REFERENCE_BONUS
    score += trend_alignment
    return min(score, _MAX_SCORE)