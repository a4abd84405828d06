"""
LOCAL FALLBACK SERVICE
======================

Rule-based answers used when the remote model is disabled, unreachable, or
failed for this session. A message is routed to the FIRST category whose
keywords it contains; if none match, a capabilities overview is returned.

ORDER MATTERS:
  Keyword sets overlap ("mba placement" hits both courses and placements), so
  FALLBACK_CATEGORIES is a priority list, not a set:

    admissions (92) > courses (94) > campus (91) > placements (89)
      > events (88) > contact (96) > default overview (85)

Keywords are substrings of the lower-cased message. Words in `whole_words` must
appear as a separate word instead ("be" the degree, not the "be" in "number").
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from app.models import ResolvedResponse
from config import INSTITUTION_FACTS

logger = logging.getLogger("MITK-AI")

LOCAL_KNOWLEDGE_SOURCE = "Local Knowledge Base"
ASSISTANT_SOURCE = f"{INSTITUTION_FACTS['short_name']} AI Assistant"


@dataclass(frozen=True)
class FallbackCategory:
    """One keyword route: a predicate over the message and the answer it produces."""
    name: str
    keywords: Tuple[str, ...]
    template: str
    confidence: int
    source: str
    whole_words: Tuple[str, ...] = ()

    def matches(self, lower_message: str) -> bool:
        if any(keyword in lower_message for keyword in self.keywords):
            return True
        return any(re.search(rf"\b{re.escape(word)}\b", lower_message) for word in self.whole_words)

    def render(self) -> ResolvedResponse:
        return ResolvedResponse(
            text=self.template.format(**INSTITUTION_FACTS),
            confidence=self.confidence,
            sources=[self.source, LOCAL_KNOWLEDGE_SOURCE],
            model=LOCAL_KNOWLEDGE_SOURCE,
        )


_CONTACT_LIST = """<ul>
<li>Phone: {phone}</li>
<li>Email: {email}</li>
<li>Website: <a href="{website}" target="_blank">{website_host}</a></li>
</ul>"""

ADMISSIONS_TEMPLATE = """<h3>{short_name} Admission Process</h3>

<p><strong>Eligibility:</strong> 10+2 with Physics, Chemistry, Mathematics (minimum 45% for general category)</p>

<p><strong>Entrance Exams:</strong> Karnataka CET, COMEDK UGET, JEE Main</p>

<p><strong>Application Process:</strong></p>
<ul>
<li>Check eligibility criteria for your chosen course (BE or MBA)</li>
<li>Gather required documents (10th &amp; 12th mark sheets, certificates, ID proof)</li>
<li>Fill application form online on {short_name} website</li>
<li>Submit application with supporting documents</li>
<li>Pay application fee as required</li>
</ul>

<p><strong>Contact Information:</strong></p>
""" + _CONTACT_LIST + """

<p>For the most accurate and up-to-date information, please visit the {short_name} website directly or contact the admissions office.</p>"""

COURSES_TEMPLATE = """<h3>{short_name} Academic Programs</h3>

<p><strong>Undergraduate Programs (BE) - 4 Years:</strong></p>
<ul>
<li>Computer Science Engineering (CSE) - Intake: 120</li>
<li>Artificial Intelligence &amp; Machine Learning (AI/ML) - Intake: 60</li>
<li>Electronics &amp; Communication Engineering (ECE)</li>
<li>Mechanical Engineering (ME)</li>
<li>Civil Engineering (CE)</li>
</ul>

<p><strong>Postgraduate Programs:</strong></p>
<ul>
<li>MBA - 2 Years</li>
<li>Specializations: Finance, Marketing, Human Resources</li>
<li>Dual specialization options available</li>
</ul>

<p><strong>Affiliation:</strong> All programs are affiliated with {affiliation} and approved by AICTE.</p>

<p>Each program focuses on both theoretical knowledge and practical application with modern laboratory facilities.</p>"""

CAMPUS_TEMPLATE = """<h3>{short_name} Campus Facilities</h3>

<p><strong>Academic Facilities:</strong></p>
<ul>
<li>Modern computer labs with latest software</li>
<li>Electronics and communication labs</li>
<li>Mechanical workshops and labs</li>
<li>Civil engineering labs</li>
<li>Digital library with e-journals and books</li>
</ul>

<p><strong>Student Amenities:</strong></p>
<ul>
<li>Separate hostels for boys and girls with Wi-Fi</li>
<li>Hygienic cafeteria with vegetarian and non-vegetarian options</li>
<li>Indoor and outdoor sports facilities</li>
<li>On-campus medical assistance</li>
<li>College bus transportation from various routes</li>
</ul>

<p><strong>Innovation Hub:</strong></p>
<ul>
<li>Technology Business Incubator (TBI) for startups</li>
<li>Research and development facilities</li>
</ul>

<p>The campus is located at {address}, providing easy accessibility.</p>"""

PLACEMENTS_TEMPLATE = """<h3>{short_name} Placement Services</h3>

<p><strong>Placement Statistics:</strong></p>
<ul>
<li>Average Package: 3.5 LPA</li>
<li>Highest Package: 8 LPA</li>
<li>Multiple placement opportunities annually</li>
</ul>

<p><strong>Top Recruiting Companies:</strong></p>
<ul>
<li>Infosys</li>
<li>Wipro</li>
<li>TCS (Tata Consultancy Services)</li>
<li>Tech Mahindra</li>
<li>Capgemini</li>
</ul>

<p><strong>Placement Support Services:</strong></p>
<ul>
<li>Pre-placement training and preparation</li>
<li>Soft skills development workshops</li>
<li>Aptitude test preparation</li>
<li>Mock interviews and group discussions</li>
<li>Campus recruitment drives</li>
</ul>

<p><strong>Recruitment Process:</strong></p>
<p>Companies typically conduct pre-placement talks, aptitude tests, technical interviews, and HR interviews on campus.</p>"""

EVENTS_TEMPLATE = """<h3>{short_name} Events &amp; Activities</h3>

<p><strong>Technical Events:</strong></p>
<ul>
<li><strong>Cerebrox:</strong> AI &amp; ML technical forum with seminars, workshops, and project presentations</li>
<li><strong>Saavishkaar:</strong> Annual technical fest featuring project exhibitions and competitions</li>
</ul>

<p><strong>Cultural Events:</strong></p>
<ul>
<li><strong>Mridula:</strong> Annual cultural fest with music, dance, and drama competitions</li>
<li>Inter-college cultural competitions</li>
<li>Student talent shows and performances</li>
</ul>

<p><strong>Student Development Programs:</strong></p>
<ul>
<li>Skill development workshops on coding and robotics</li>
<li>IoT and AI training sessions</li>
<li>Industry expert guest lectures</li>
</ul>

<p><strong>Student Clubs:</strong></p>
<ul>
<li>Photography Club for event coverage and creative projects</li>
<li>Robotics Club for building and testing robots</li>
<li>Various department-specific technical clubs</li>
</ul>"""

CONTACT_TEMPLATE = """<h3>{short_name} Contact Information</h3>

<p><strong>Address:</strong></p>
<p>{name} ({short_name})<br>
{address}</p>

<p><strong>Contact Details:</strong></p>
""" + _CONTACT_LIST + """

<p><strong>Transportation:</strong></p>
<ul>
<li>Nearest Railway Station: Kundapura Railway Station</li>
<li>Nearest Bus Stop: Kundapura Bus Stand</li>
<li>College bus services available from various routes in Udupi and Kundapura</li>
</ul>

<p><strong>Established:</strong> {established}<br>
<strong>Affiliation:</strong> {affiliation}<br>
<strong>Approvals:</strong> AICTE, Government of Karnataka</p>"""

DEFAULT_TEMPLATE = """<h3>{short_name} AI Assistant</h3>

<p>I'm here to help you with information about {name} ({short_name}).</p>

<p><strong>I can provide information about:</strong></p>
<ul>
<li>Admission process and eligibility criteria</li>
<li>Academic programs (BE and MBA courses)</li>
<li>Campus facilities and infrastructure</li>
<li>Placement services and career opportunities</li>
<li>Events, activities, and student clubs</li>
<li>Contact information and location details</li>
</ul>

<p><strong>Quick Contact:</strong></p>
""" + _CONTACT_LIST + """

<p>Please feel free to ask me anything about {short_name}!</p>"""

_SHORT = INSTITUTION_FACTS["short_name"]

FALLBACK_CATEGORIES: Tuple[FallbackCategory, ...] = (
    FallbackCategory(
        name="admissions",
        keywords=("admission", "eligibility", "apply"),
        template=ADMISSIONS_TEMPLATE,
        confidence=92,
        source=f"{_SHORT} Official Information",
    ),
    FallbackCategory(
        name="courses",
        keywords=("course", "program", "degree", "mba"),
        whole_words=("be",),
        template=COURSES_TEMPLATE,
        confidence=94,
        source=f"{_SHORT} Academic Department",
    ),
    FallbackCategory(
        name="campus",
        keywords=("campus", "hostel", "facilities", "infrastructure"),
        template=CAMPUS_TEMPLATE,
        confidence=91,
        source=f"{_SHORT} Campus Administration",
    ),
    FallbackCategory(
        name="placements",
        keywords=("placement", "job", "career", "company", "package"),
        template=PLACEMENTS_TEMPLATE,
        confidence=89,
        source=f"{_SHORT} Placement Cell",
    ),
    FallbackCategory(
        name="events",
        keywords=("event", "fest", "activity", "club", "cultural"),
        template=EVENTS_TEMPLATE,
        confidence=88,
        source=f"{_SHORT} Student Affairs",
    ),
    FallbackCategory(
        name="contact",
        keywords=("location", "address", "contact", "phone", "email"),
        template=CONTACT_TEMPLATE,
        confidence=96,
        source=f"{_SHORT} Official Directory",
    ),
)

DEFAULT_CATEGORY = FallbackCategory(
    name="default",
    keywords=(),
    template=DEFAULT_TEMPLATE,
    confidence=85,
    source=ASSISTANT_SOURCE,
)


def match_category(
    message: str,
    categories: Sequence[FallbackCategory] = FALLBACK_CATEGORIES,
) -> Optional[FallbackCategory]:
    """Return the first category whose keywords appear in the message, or None."""
    lower = (message or "").lower()
    for category in categories:
        if category.matches(lower):
            return category
    return None


def resolve_fallback(message: str) -> ResolvedResponse:
    """Answer from local knowledge only. Never fails and never touches the network."""
    category = match_category(message) or DEFAULT_CATEGORY
    logger.info("Fallback answer from category '%s'", category.name)
    return category.render()
