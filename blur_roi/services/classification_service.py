import logging
import os
from dotenv import load_dotenv
from ..models.analysis_result import Verdict

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ClassificationService:
    """
    Turns a Laplacian variance into a verdict.
    The default threshold is only meaningful for the CLAHE + bilateral + Laplacian
    chain in ContrastService/SharpnessService.
    """

    def __init__(self, threshold: float = None):
        self.SHARPNESS_THR = threshold if threshold is not None else float(os.getenv("SHARPNESS_THR", "100"))

    def classify(self, score: float) -> Verdict:
        verdict = Verdict.NOT_BLURRY if score >= self.SHARPNESS_THR else Verdict.BLURRY
        logger.debug(f"score={score:.2f} thr={self.SHARPNESS_THR} → {verdict.label}")
        return verdict

    def is_sharp(self, score: float) -> bool:
        return self.classify(score) is Verdict.NOT_BLURRY
