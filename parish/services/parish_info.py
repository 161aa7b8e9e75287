"""Static copy for the informational pages (sacraments, safeguarding, school)."""
from __future__ import annotations

from typing import Optional

from parish.services.content_service import ContentService

# slug -> page copy; "tracker" names the preparation checklist shown on the page
SACRAMENTS = (
    {
        "slug": "baptism",
        "name": "Baptism",
        "image": "baptism",
        "subtitle": "The Sacrament of New Life",
        "description": "The gateway to life in the Spirit and the door which gives access to the other sacraments.",
        "details": "Through Baptism we are freed from sin and reborn as children of God.",
        "intro": (
            "Baptism is the first and chief sacrament of forgiveness of sins because it unites us with Christ, "
            "who died for our sins and rose for our justification. We celebrate baptism for people of all ages, "
            "from infants to adults, with appropriate preparation for each stage of life."
        ),
        "tracker": "baptism",
    },
    {
        "slug": "confirmation",
        "name": "Confirmation",
        "image": "confirmation",
        "subtitle": "Strengthened by the Spirit",
        "description": "Completes Christian initiation and strengthens us with the gifts of the Holy Spirit.",
        "details": "Confirmation deepens baptismal grace and roots us more deeply in divine filiation.",
        "intro": (
            "Confirmation is a sacrament of initiation that completes what was begun in Baptism. We offer "
            "Confirmation preparation for both young people and adults, with programs tailored to each age "
            "group's needs and circumstances."
        ),
        "tracker": "confirmation",
    },
    {
        "slug": "the-eucharist",
        "name": "The Eucharist",
        "image": "eucharist",
        "subtitle": "Source and Summit of Christian Life",
        "description": "The source and summit of Christian life, the Body and Blood of Christ.",
        "details": "In Holy Communion, we receive Christ himself and are united with him and each other.",
        "intro": (
            "The Eucharist is the sacrament of sacraments, the source and summit of the Christian life. "
            "In this holy sacrifice, Christ gives us his Body and Blood under the appearances of bread and wine."
        ),
        "tracker": "communion",
    },
    {
        "slug": "confession",
        "name": "Confession",
        "image": "confession",
        "subtitle": "Reconciliation and Forgiveness",
        "description": "The sacrament of forgiveness and reconciliation with God and the Church.",
        "details": "Through confession, we receive God's mercy and are restored to grace.",
        "intro": (
            "Confession, also known as the Sacrament of Reconciliation or Penance, is God's gift of forgiveness "
            "and healing. Regular times for the sacrament are available throughout the week."
        ),
        "tracker": None,
    },
    {
        "slug": "anointing-of-the-sick",
        "name": "Anointing of the Sick",
        "image": "anointing",
        "subtitle": "Sacrament of Healing and Comfort",
        "description": "Brings spiritual and sometimes physical healing to those who are seriously ill.",
        "details": "This sacrament provides comfort, courage, and spiritual strength in times of illness.",
        "intro": (
            "The Anointing of the Sick provides spiritual comfort, courage, and strength to those facing serious "
            "illness, surgery, or the frailty of old age. It is available to any baptized Catholic who is "
            "seriously ill."
        ),
        "tracker": None,
    },
    {
        "slug": "holy-orders",
        "name": "Holy Orders",
        "image": "orders",
        "subtitle": "Sacrament of Service",
        "description": "The sacrament by which bishops, priests, and deacons are ordained.",
        "details": "Through Holy Orders, men are consecrated to serve God and his people.",
        "intro": (
            "Holy Orders is the sacrament through which the mission entrusted by Christ to his apostles continues "
            "to be exercised in the Church. It includes three degrees: bishops, priests and deacons."
        ),
        "tracker": None,
    },
    {
        "slug": "matrimony",
        "name": "Matrimony",
        "image": "matrimony",
        "subtitle": "A Sacred Covenant",
        "description": "The sacred covenant between a man and woman that mirrors Christ's love for the Church.",
        "details": "Marriage is a lifelong partnership ordered toward the good of the spouses and children.",
        "intro": (
            "In the Catholic understanding, marriage is not just a legal contract but a sacred covenant, blessed "
            "by God and witnessed by the Church community. We welcome couples who wish to celebrate their "
            "marriage in our church."
        ),
        "tracker": None,
    },
)

EMERGENCY_CONTACTS = (
    {"situation": "Child or Adult in Immediate Danger", "contact": "999", "description": "Emergency Services",
     "available": "24/7", "urgent": True},
    {"situation": "Police Non-Emergency", "contact": "101", "description": "For non-urgent police matters",
     "available": "24/7", "urgent": False},
    {"situation": "NSPCC Helpline", "contact": "0808 800 5000", "description": "For concerns about a child",
     "available": "24/7", "urgent": False},
    {"situation": "Childline", "contact": "0800 1111", "description": "For children and young people",
     "available": "24/7", "urgent": False},
)

DIOCESAN_CONTACTS = (
    {"role": "Diocesan Safeguarding Coordinator", "name": "Helen Sheppard", "phone": "020 8688 2181",
     "email": "helen.sheppard@rcaos.org.uk", "office": "Archdiocese of Southwark"},
    {"role": "Assistant Safeguarding Coordinator", "name": "Jeanette Donnelly", "phone": "020 8688 2181",
     "email": "jeanette.donnelly@rcaos.org.uk", "office": "Archdiocese of Southwark"},
)

SCHOOL_STATS = (
    {"label": "Current Pupils", "value": "420"},
    {"label": "Teaching Staff", "value": "28"},
    {"label": "Ofsted Rating", "value": "Good"},
    {"label": "Founded", "value": "1872"},
)

SCHOOL_KEY_STAGES = (
    {"stage": "Early Years Foundation Stage", "ages": "3-5 years",
     "description": "Nurturing young minds through play-based learning in our caring environment.",
     "highlights": ["Qualified Early Years teachers", "Outdoor learning areas", "Daily prayers and Catholic values"]},
    {"stage": "Key Stage 1", "ages": "5-7 years (Years 1-2)",
     "description": "Building fundamental skills in literacy, numeracy, and faith formation.",
     "highlights": ["Phonics programme", "First Holy Communion preparation", "Small class sizes"]},
    {"stage": "Key Stage 2", "ages": "7-11 years (Years 3-6)",
     "description": "Developing confident, capable young Catholics ready for secondary education.",
     "highlights": ["SATs preparation", "Leadership opportunities", "Confirmation preparation"]},
)

SCHOOL_VALUES = (
    {"title": "Love & Compassion", "description": "Following Christ's example of love and care for others"},
    {"title": "Excellence", "description": "Striving for the best in all areas of learning and development"},
    {"title": "Community", "description": "Building strong relationships within our school and parish family"},
    {"title": "Growth", "description": "Encouraging every child to reach their full potential"},
)

HOSPITAL_CHAPLAINCY = {
    "hospital": "Lewisham Hospital",
    "chaplain": "Fr Christian",
    "phone": "07436 051067",
    "teamPhone": "0208 333 3299",
}


def get_sacrament(slug: str) -> Optional[dict]:
    for sacrament in SACRAMENTS:
        if sacrament["slug"] == slug:
            return sacrament
    return None


def parish_safeguarding_contacts(content: ContentService) -> list[dict]:
    contact = content.get_contact_info()
    return [
        {
            "role": "Parish Safeguarding Representative",
            "name": "Sarah Mitchell",
            "phone": contact.get("safeguardingPhone", ""),
            "email": "safeguarding@saintsaviours.org.uk",
            "availability": "Monday-Friday, 9:00 AM - 5:00 PM",
        },
        {
            "role": "Parish Priest",
            "name": content.get_parish_info().get("priest", ""),
            "phone": contact.get("phone", ""),
            "email": contact.get("email", ""),
            "availability": "By appointment",
        },
    ]
