from .User import ProfileResponse
from .Experience import ExperienceRead
from .Education import EducationRead

# GET /api/profile also lists the work and education history
class ProfileDetail(ProfileResponse):
    experiences: list[ExperienceRead] = []
    education: list[EducationRead] = []
