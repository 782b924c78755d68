from portfolio_api.db.base_class import Base


# IMPORT ALL MODELS HERE (THIS REGISTERS THEM WITH Base.metadata)
from portfolio_api.models.project import Project
from portfolio_api.models.skill import Skill, SkillConnection
from portfolio_api.models.experience import Experience
from portfolio_api.models.testimonial import Testimonial
from portfolio_api.models.message import Message
from portfolio_api.models.seo import SeoSettings
from portfolio_api.models.article import Article, ArticleTag
from portfolio_api.models.analytics import AnalyticsEvent
from portfolio_api.models.mindset import MindsetPrinciple
from portfolio_api.models.service import Service
