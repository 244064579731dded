from legalsift.analysis.assessor import RiskAssessor
from legalsift.analysis.models import AssessmentOutcome, FlaggedClause, RiskAssessment

__all__ = ["AssessmentOutcome", "FlaggedClause", "RiskAssessment", "RiskAssessor"]
