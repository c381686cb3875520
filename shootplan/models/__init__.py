from shootplan.models.checklist import Category, InstanceItem, MasterTemplate, TemplateItem
from shootplan.models.document import StoredDocument

__all__ = ["Category", "TemplateItem", "InstanceItem", "MasterTemplate", "StoredDocument"]
