"""Tests for prdplan.decompose.risks module."""

from prdplan.decompose.models import Project, Requirement, Task
from prdplan.decompose.risks import RISK_RULES, identify_risks


REAL_TIME = "Real-time requirements may add complexity and require specialized expertise"
SCALE = "Scalability requirements may require additional architecture considerations"
INTEGRATIONS = "Multiple third-party integrations increase complexity and potential points of failure"
COMPLIANCE = "Compliance requirements may extend timeline and require specialized knowledge"
ML_AI = "ML/AI components add uncertainty to timeline and require specialized skills"
CRITICAL = "High percentage of critical tasks indicates limited flexibility in prioritization"
DEPENDENCIES = "Complex task dependencies may create bottlenecks and delay project completion"


def make_project(prd="", description=""):
    return Project(id="p1", name="Shop", description=description, prd=prd)


def make_task(task_id, title="Task", priority="medium", deps=()):
    return Task(
        id=task_id,
        project_id="p1",
        type="implementation",
        title=title,
        description="",
        priority=priority,
        dependencies=list(deps),
    )


def make_req(description):
    return Requirement(
        id="r1", project_id="p1", type="functional", title="REQ-1: x",
        description=description, priority="medium",
    )


class TestTextRisks:
    """Keyword-driven risks."""

    def test_no_risks(self):
        assert identify_risks(make_project("A simple todo list"), [], []) == []

    def test_real_time(self):
        assert identify_risks(make_project("Realtime chat"), [], []) == [REAL_TIME]
        assert identify_risks(make_project("real-time chat"), [], []) == [REAL_TIME]

    def test_scale(self):
        assert identify_risks(make_project("Serve a million users"), [], []) == [SCALE]

    def test_compliance_from_description(self):
        assert identify_risks(make_project(description="Regulatory reporting"), [], []) == [COMPLIANCE]

    def test_ml_ai_needs_spaces(self):
        assert identify_risks(make_project("Use AI for ranking"), [], []) == [ML_AI]
        assert identify_risks(make_project("Maintain the email queue"), [], []) == []

    def test_machine_learning(self):
        assert identify_risks(make_project("Machine learning recommendations"), [], []) == [ML_AI]

    def test_requirement_text_included(self):
        risks = identify_risks(make_project(""), [make_req("Handle high volume traffic")], [])
        assert risks == [SCALE]

    def test_rule_order(self):
        prd = "Realtime machine learning at scale, with compliance"
        assert identify_risks(make_project(prd), [], []) == [REAL_TIME, SCALE, COMPLIANCE, ML_AI]


class TestTaskRisks:
    """Task-shape risks."""

    def test_many_integrations(self):
        tasks = [make_task(str(i), title=f"Vendor{i} Integration") for i in range(3)]
        assert identify_risks(make_project("integration heavy"), [], tasks) == [INTEGRATIONS]

    def test_two_integrations_not_enough(self):
        tasks = [make_task(str(i), title=f"Vendor{i} Integration") for i in range(2)]
        assert identify_risks(make_project("integration heavy"), [], tasks) == []

    def test_integrations_need_text_mention(self):
        tasks = [make_task(str(i), title=f"Vendor{i} Integration") for i in range(3)]
        assert identify_risks(make_project("vendors"), [], tasks) == []

    def test_mostly_critical(self):
        tasks = [make_task("a", priority="critical"), make_task("b"), make_task("c")]
        # 1 > 3 * 0.3
        assert identify_risks(make_project(), [], tasks) == [CRITICAL]

    def test_critical_ratio_configurable(self):
        tasks = [make_task("a", priority="critical"), make_task("b"), make_task("c")]
        assert identify_risks(make_project(), [], tasks, critical_ratio=0.5) == []

    def test_dependency_heavy(self):
        tasks = [make_task("a", deps=["1", "2", "3", "4"])]
        assert identify_risks(make_project(), [], tasks) == [DEPENDENCIES]

    def test_three_dependencies_ok(self):
        tasks = [make_task("a", deps=["1", "2", "3"])]
        assert identify_risks(make_project(), [], tasks) == []

    def test_rule_count(self):
        assert len(RISK_RULES) == 7
