from shootplan.checklists.domains import COUPLE_SHOT, DOMAINS, GROUP_SHOT, KIT, TASK, ChecklistDomain, get_domain
from shootplan.checklists.editor import TemplateEditor
from shootplan.checklists.engine import ChecklistEngine, ChecklistProgress, ChecklistState, EngineStatus
from shootplan.checklists.instances import ProjectInstanceStore
from shootplan.checklists.masters import MasterTemplateStore
from shootplan.checklists.store import DocumentStore, SqlDocumentStore

__all__ = [
    "ChecklistDomain",
    "KIT",
    "TASK",
    "GROUP_SHOT",
    "COUPLE_SHOT",
    "DOMAINS",
    "get_domain",
    "MasterTemplateStore",
    "ProjectInstanceStore",
    "ChecklistEngine",
    "ChecklistState",
    "ChecklistProgress",
    "EngineStatus",
    "TemplateEditor",
    "DocumentStore",
    "SqlDocumentStore",
]
