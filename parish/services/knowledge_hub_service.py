"""
Knowledge Hub: theology, saints and mystics articles.

Article bodies are lightweight markdown (headings, lists, paragraphs).
``content_blocks`` splits a body into typed blocks the template renders with
autoescaping, so no HTML from the body ever reaches the page unescaped.
"""
from __future__ import annotations

import re
from typing import Optional

CATEGORIES = (
    {
        "id": "church-fathers",
        "slug": "church-fathers",
        "title": "Church Fathers",
        "description": (
            "Explore the foundational teachings of the early Church Fathers and their lasting impact on "
            "Catholic theology."
        ),
        "featured": True,
    },
    {
        "id": "medieval-theology",
        "slug": "medieval-theology",
        "title": "Medieval Theology",
        "description": "Discover the scholastic tradition and the great theologians of the Middle Ages.",
        "featured": True,
    },
    {
        "id": "catholic-mystics",
        "slug": "catholic-mystics",
        "title": "Catholic Mystics",
        "description": "Learn from the contemplative saints and their profound spiritual experiences.",
        "featured": True,
    },
    {
        "id": "modern-saints",
        "slug": "modern-saints",
        "title": "Modern Saints",
        "description": "Study the lives and teachings of recent saints and their relevance to contemporary life.",
        "featured": False,
    },
)

_ABELARD = """# Peter Abelard: The Philosopher of Love

## Introduction

Peter Abelard (1079-1142) was one of the most influential philosophers and theologians of the medieval period. While he is often remembered for his tragic love affair with Heloise, his contributions to Catholic theology were profound and lasting. Abelard developed what became known as the 'critical methodology' for understanding the Catholic faith, emphasizing the importance of reason in theological inquiry.

## Early Life and Education

Born in Le Pallet, near Nantes in Brittany, Abelard was the eldest son of a knight. Rather than pursuing a military career, he chose the path of learning, studying under some of the most renowned teachers of his time. His intellectual prowess quickly became apparent, and he soon began teaching himself, attracting students from across Europe.

## The Critical Methodology

Abelard's most significant contribution to theology was his work 'Sic et Non' (Yes and No), completed around 1120. This revolutionary text presented 158 theological questions, each followed by contradictory statements from Church authorities - the Bible, Church Fathers, and papal decrees.

### Key Principles:

1. **Doubt as a Tool for Truth**: Abelard argued that by doubting, we are led to inquiry, and by inquiry, we arrive at truth.
2. **Rational Investigation**: He believed that apparent contradictions in Christian doctrine could be resolved through careful rational analysis.
3. **Dialectical Method**: His approach involved examining opposing viewpoints to reach a deeper understanding of theological truths.

## The Scholastic Foundation

Abelard's methodology laid the groundwork for the scholastic tradition that would dominate medieval theology. His approach influenced later giants like Thomas Aquinas, who would perfect the synthesis of faith and reason.

### Impact on Medieval Thought:

- **University Development**: His teaching methods contributed to the rise of medieval universities
- **Theological Debate**: He established the importance of reasoned debate in theological education
- **Critical Thinking**: His emphasis on questioning authority encouraged intellectual independence

## Personal Struggles and Redemption

Abelard's life was marked by controversy and personal tragedy. His secret marriage to Heloise and subsequent forced separation led to profound spiritual reflection. After becoming a monk, he continued his theological work, though not without further conflicts with Church authorities.

## Love and Theology

Abelard's understanding of love was both personal and theological. He distinguished between different types of love:

1. **Carnal Love**: Physical attraction and desire
2. **Spiritual Love**: Love based on virtue and mutual respect
3. **Divine Love**: The ultimate love that draws us to God

His famous letters with Heloise reveal a man grappling with these different dimensions of love, ultimately finding that human love, properly understood, can be a pathway to divine love.

## Conclusion

Peter Abelard remains a fascinating figure whose life and work embody the tension between reason and faith, human love and divine love, individual conscience and ecclesiastical authority. His critical methodology reminds us that faith strengthened by reason is more robust than faith that fears questioning.

For modern Catholics, Abelard's legacy encourages us to:

- Engage thoughtfully with our faith
- Ask difficult questions
- Seek understanding through both reason and revelation
- Recognize that human experiences, including love and suffering, can deepen our relationship with God

## Further Reading

- Gilson, Étienne. *Heloise and Abelard*
- Clanchy, M.T. *Abelard: A Medieval Life*
- Marenbon, John. *The Philosophy of Peter Abelard*
- McGrath, Alister. *Christian Theology: An Introduction*
"""

_AUGUSTINE = """# St Augustine of Hippo: The Doctor of Grace

*Coming soon...*

This comprehensive exploration of St Augustine's life and theology will examine his conversion, his theological innovations, and his lasting impact on Catholic doctrine.

## Preview of Topics:

- The Confessions and spiritual autobiography
- The doctrine of original sin and grace
- The City of God and political theology
- Trinitarian theology
- Influence on later theologians

*This article is currently being prepared and will be available soon.*
"""

_JULIAN = """# Julian of Norwich: Revelations of Divine Love

*Coming soon...*

Discover the profound mystical insights of Julian of Norwich, the 14th-century English anchoress whose visions of divine love continue to inspire Christians today.

## Preview of Topics:

- The Showings and mystical visions
- "All shall be well" - theology of hope
- Maternal imagery for God
- Medieval women's spirituality
- Influence on modern theology

*This article is currently being prepared and will be available soon.*
"""

HUB_AUTHOR = "St Saviour's Knowledge Hub"

ARTICLES = (
    {
        "id": "peter-abelard-philosopher-love",
        "slug": "peter-abelard-philosopher-love",
        "title": "Peter Abelard: The Philosopher of Love",
        "subtitle": "Critical Methodology and the Scholastic Tradition",
        "excerpt": (
            "Discover the profound theological insights of this 12th-century philosopher who developed critical "
            "methodology for understanding the Catholic faith. Known for his relationship with Heloise, Abelard "
            "was also a deep theological thinker who challenged the Church to think more critically about faith."
        ),
        "content": _ABELARD,
        "author": HUB_AUTHOR,
        "category": "medieval-theology",
        "tags": ["Philosophy", "Scholasticism", "Medieval", "Theology", "Love", "Reason", "Faith"],
        "readTime": "12 min",
        "publishedDate": "2025-01-15",
        "image": {
            "src": "/images/stained_glass_st_margaret_clitherow_st_saviours.jpeg",
            "alt": "Stained glass window of St Margaret Clitherow at St Saviour's Church",
        },
        "featured": True,
        "status": "published",
        "metaDescription": (
            "Discover Peter Abelard's revolutionary critical methodology and his profound impact on medieval "
            "theology."
        ),
        "relatedArticles": ["augustine-doctor-grace", "julian-norwich-revelations"],
        "quotes": [
            {
                "text": "By doubting we are led to question, by questioning we arrive at the truth.",
                "source": "Peter Abelard",
                "citation": "Sic et Non, Prologue",
            }
        ],
    },
    {
        "id": "augustine-doctor-grace",
        "slug": "augustine-doctor-grace",
        "title": "St Augustine of Hippo: The Doctor of Grace",
        "subtitle": "Foundations of Western Christian Thought",
        "excerpt": (
            "Explore the life and teachings of one of the most influential theologians in Christian history, "
            "whose insights into grace, free will, and the nature of God continue to shape Catholic doctrine today."
        ),
        "content": _AUGUSTINE,
        "author": HUB_AUTHOR,
        "category": "church-fathers",
        "tags": ["Church Fathers", "Grace", "Doctrine", "Patristics", "Conversion", "Trinity"],
        "readTime": "15 min",
        "publishedDate": "Coming Soon",
        "image": {
            "src": "/images/chapel_st_patrick_st_saviours.jpeg",
            "alt": "Chapel of St Patrick at St Saviour's Church",
        },
        "featured": False,
        "status": "published",
        "metaDescription": "Explore the theological insights of St Augustine of Hippo on grace and free will.",
        "relatedArticles": ["peter-abelard-philosopher-love"],
        "quotes": [],
    },
    {
        "id": "julian-norwich-revelations",
        "slug": "julian-norwich-revelations",
        "title": "Julian of Norwich: Revelations of Divine Love",
        "subtitle": "England's First Female Theologian",
        "excerpt": (
            "Journey into the mystical visions of England's first female theologian and her profound insights "
            "into God's love, showing how divine love encompasses all creation."
        ),
        "content": _JULIAN,
        "author": HUB_AUTHOR,
        "category": "catholic-mystics",
        "tags": ["Mysticism", "English Saints", "Divine Love", "Contemplation", "Medieval Women", "Visions"],
        "readTime": "10 min",
        "publishedDate": "Coming Soon",
        "image": {
            "src": "/images/st_saviours_interior_1939_archive_photo.jpeg",
            "alt": "Historical interior of St Saviour's Church from 1939 archive",
        },
        "featured": False,
        "status": "published",
        "metaDescription": "Explore the mystical visions of Julian of Norwich and her revelations of God's love.",
        "relatedArticles": ["peter-abelard-philosopher-love"],
        "quotes": [],
    },
)

_HEADING = re.compile(r"^(#{1,3})\s+(.*)$")
_BULLET = re.compile(r"^[-*]\s+(.*)$")
_NUMBERED = re.compile(r"^\d+\.\s+(.*)$")
_EMPHASIS = re.compile(r"(\*\*|\*)(.+?)\1")


def get_category(slug: str) -> Optional[dict]:
    for category in CATEGORIES:
        if category["slug"] == slug:
            return category
    return None


def category_title(article: dict) -> str:
    category = get_category(article.get("category", ""))
    return category["title"] if category else ""


def published_articles() -> list[dict]:
    return [a for a in ARTICLES if a["status"] == "published"]


def featured_articles() -> list[dict]:
    return [a for a in published_articles() if a["featured"]]


def get_article(slug: str) -> Optional[dict]:
    for article in ARTICLES:
        if article["slug"] == slug:
            return article
    return None


def articles_in_category(slug: str) -> list[dict]:
    return [a for a in ARTICLES if a["category"] == slug]


def category_counts() -> dict[str, int]:
    return {c["slug"]: len(articles_in_category(c["slug"])) for c in CATEGORIES}


def related_articles(article_id: str) -> list[dict]:
    by_id = {a["id"]: a for a in ARTICLES}
    article = by_id.get(article_id)
    if not article:
        return []
    return [by_id[rid] for rid in article.get("relatedArticles", []) if rid in by_id]


def search(query: str) -> list[dict]:
    """Case-insensitive match on title, excerpt, tags or category title."""
    needle = (query or "").strip().lower()
    if not needle:
        return []
    hits = []
    for article in published_articles():
        haystack = [article["title"], article["excerpt"], category_title(article), *article["tags"]]
        if any(needle in text.lower() for text in haystack):
            hits.append(article)
    return hits


def _plain(text: str) -> str:
    return _EMPHASIS.sub(r"\2", text).strip()


def content_blocks(content: str) -> list[dict]:
    """
    Split an article body into blocks: ``heading`` (with level), ``list``
    (ordered or not, with items) and ``paragraph``. The leading H1 is dropped
    because the page already shows the title.
    """
    blocks: list[dict] = []
    paragraph: list[str] = []

    def flush():
        if paragraph:
            blocks.append({"type": "paragraph", "text": _plain(" ".join(paragraph))})
            paragraph.clear()

    for raw in (content or "").splitlines():
        line = raw.strip()
        if not line:
            flush()
            continue
        heading = _HEADING.match(line)
        bullet = _BULLET.match(line)
        numbered = _NUMBERED.match(line)
        if heading:
            flush()
            level = len(heading.group(1))
            if level == 1 and not blocks:
                continue
            blocks.append({"type": "heading", "level": level + 1, "text": _plain(heading.group(2))})
        elif bullet or numbered:
            flush()
            ordered = numbered is not None
            item = _plain((numbered or bullet).group(1))
            last = blocks[-1] if blocks else None
            if last and last["type"] == "list" and last["ordered"] == ordered:
                last["items"].append(item)
            else:
                blocks.append({"type": "list", "ordered": ordered, "items": [item]})
        else:
            paragraph.append(line)
    flush()
    return blocks
