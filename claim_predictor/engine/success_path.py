"""The six-step claim success playbook.

The playbook is the same for every claim.
"""

from typing import List

from ..models.prediction import SuccessPathStep

SUCCESS_PATH = (
    SuccessPathStep(
        step=1,
        action="Documentation Phase",
        do_this="Upload 15-20 high-quality photos from multiple angles. Include close-ups and wide shots.",
        dont_do_this="Don't submit blurry photos or less than 10 total images.",
    ),
    SuccessPathStep(
        step=2,
        action="AI Analysis",
        do_this="Run Dominus AI analysis to identify all damage and materials. Export adjuster packet.",
        dont_do_this="Don't skip AI analysis - carriers respect data-driven reports.",
    ),
    SuccessPathStep(
        step=3,
        action="Storm Correlation",
        do_this="Generate storm impact report with NOAA data. Prove damage timing and severity.",
        dont_do_this="Don't submit without storm documentation - carriers will deny for lack of causation.",
    ),
    SuccessPathStep(
        step=4,
        action="Video Presentation",
        do_this="Create professional video walkthrough. Show damage clearly and narrate findings.",
        dont_do_this="Don't rely on photos alone - video doubles approval rates.",
    ),
    SuccessPathStep(
        step=5,
        action="Submit to Carrier",
        do_this="Send complete packet with all documentation. Follow up in 5-7 days.",
        dont_do_this="Don't submit piecemeal. Incomplete submissions trigger denials.",
    ),
    SuccessPathStep(
        step=6,
        action="Negotiation",
        do_this="If partial approval, use supplement engine to argue for missing items with code citations.",
        dont_do_this="Don't accept first offer without review. Most initial offers are 60-70% of actual.",
    ),
)


def success_path() -> List[SuccessPathStep]:
    """Return a fresh list of the playbook steps."""
    return list(SUCCESS_PATH)
