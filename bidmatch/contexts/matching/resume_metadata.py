"""Resume metadata value object supplied by the resume repository."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from bidmatch.contexts.matching.tech_stack import TechStackValue


@dataclass(frozen=True)
class ResumeMetadata:
    """
    Metadata about a saved resume, as loaded by the surrounding application.

    Attributes:
        id: Resume identifier
        company: Company the resume was tailored for
        role: Role the resume was tailored for
        tech_stack: Technologies the resume targets
        file_path: Where the resume file lives (opaque to the matching engine)
        created_at: When the resume was saved, used to break score ties
        jd_spec_id: Id of the CanonicalJDSpec the resume was written against, if any
    """

    id: str
    company: str
    role: str
    tech_stack: TechStackValue
    file_path: str
    created_at: datetime
    jd_spec_id: Optional[str] = None
