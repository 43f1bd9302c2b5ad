# ai_governance/dal/__init__.py
from .acknowledgement_dal import MongoAcknowledgementStore
from .execution_log_dal import AuditWriteError, MongoExecutionLog
from .governance_dal import MongoGovernanceStore

__all__ = ["MongoAcknowledgementStore", "AuditWriteError", "MongoExecutionLog", "MongoGovernanceStore"]
