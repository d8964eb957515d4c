from app.models.tenant import Tenant
from app.models.page import Page
from app.models.content import FAQ, Service, TeamMember, Testimonial

__all__ = ["Tenant", "Page", "Service", "TeamMember", "Testimonial", "FAQ"]
