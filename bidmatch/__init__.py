"""
BIDMATCH - Skill matching and correlation engine for job application tracking

Scores how well past resumes and job descriptions fit a new job description.
Bids, interviews and persistence live in the surrounding application; this
package only turns already-loaded inputs into scores.

Architecture:
- Skills Context: Skill vocabulary (canonicalization, dictionary, review queue)
- Matching Context: Tech stack scoring and JD-to-JD correlation
"""

__version__ = "0.1.0"
