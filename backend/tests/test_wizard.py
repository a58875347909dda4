"""
Tests for WizardStateMachine.

Covers routing by scheme, back navigation, the contribution-form gate and
the asynchronous submit step (with fake submission clients).
"""
import json

import httpx
import pytest

from benefit_survey.models.db_models import Scheme
from benefit_survey.models.wizard import (
    RespondentPatch,
    Screen,
    Session,
    SubmissionStatus,
    SuggestionsPatch,
)
from benefit_survey.services.catalog import SE_CHILD_ALLOWANCE, UNEMPLOYMENT, benefits_for
from benefit_survey.services.submission import (
    FailureKind,
    FeedbackSubmissionClient,
    SubmissionResult,
)
from benefit_survey.services.wizard import WizardStateMachine


# =============================================================================
# FAKE CLIENTS
# =============================================================================

class FakeClient:
    """Returns a canned result and counts calls."""

    def __init__(self, result=None):
        self.result = result or SubmissionResult(success=True, record_id="abc")
        self.calls = 0

    async def submit(self, session):
        self.calls += 1
        return self.result


class NavigatingClient(FakeClient):
    """Simulates the respondent pressing back while the request is in flight."""

    def __init__(self, machine, result=None):
        super().__init__(result)
        self.machine = machine

    async def submit(self, session):
        self.calls += 1
        self.machine.go_back()
        return self.result


class ReentrantClient(FakeClient):
    """Tries to submit again while the first submission is still in flight."""

    def __init__(self, machine):
        super().__init__()
        self.machine = machine
        self.inner_result = None

    async def submit(self, session):
        self.calls += 1
        if self.inner_result is None:
            self.inner_result = await self.machine.submit(self)
        return self.result


class ExplodingClient:
    async def submit(self, session):
        raise RuntimeError("boom")


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def machine():
    return WizardStateMachine()


def at_user_input(scheme, option=None):
    m = WizardStateMachine()
    m.start()
    m.select_scheme(scheme)
    if option is not None:
        m.select_sub_option(option)
    m.continue_to_user_input()
    return m


def at_suggestions_for_employee():
    m = at_user_input(Scheme.MANDATORY_EMPLOYEE)
    m.update_respondent(RespondentPatch(age="30", occupation="clerk", years_contributing="5", monthly_contribution="750"))
    m.continue_to_suggestions()
    m.update_suggestions(SuggestionsPatch(other="more coverage"))
    return m


# =============================================================================
# TEST: ROUTING
# =============================================================================

class TestRouting:

    def test_starts_at_home(self, machine):
        assert machine.session.current_screen == Screen.HOME
        assert machine.session.scheme is None

    def test_start_moves_to_selection(self, machine):
        success, _ = machine.start()
        assert success is True
        assert machine.session.current_screen == Screen.SELECTION

    def test_start_only_from_home(self, machine):
        machine.start()
        success, message = machine.start()
        assert success is False
        assert "Cannot transition" in message
        assert machine.session.current_screen == Screen.SELECTION

    def test_self_employed_goes_to_options(self, machine):
        machine.start()
        machine.select_scheme(Scheme.SELF_EMPLOYED)
        assert machine.session.current_screen == Screen.SCHEME_SUB_OPTIONS
        assert machine.session.scheme == Scheme.SELF_EMPLOYED

    def test_not_registered_skips_to_suggestions(self, machine):
        machine.start()
        machine.select_scheme(Scheme.NOT_REGISTERED)
        assert machine.session.current_screen == Screen.SUGGEST_BENEFITS

    @pytest.mark.parametrize("scheme", [Scheme.MANDATORY_EMPLOYEE, Scheme.VOLUNTARY_CONTINUATION])
    def test_registered_schemes_show_benefits(self, machine, scheme):
        machine.start()
        machine.select_scheme(scheme)
        assert machine.session.current_screen == Screen.CURRENT_BENEFITS
        assert machine.available_benefits() == benefits_for(scheme)

    def test_option_cannot_be_selected_directly(self, machine):
        machine.start()
        success, _ = machine.select_scheme(Scheme.SELF_EMPLOYED_OPTION_2)
        assert success is False
        assert machine.session.scheme is None
        assert machine.session.current_screen == Screen.SELECTION

    def test_select_scheme_only_on_selection(self, machine):
        success, message = machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        assert success is False
        assert "home" in message
        assert machine.session.scheme is None

    def test_sub_option_sets_scheme_and_rate(self, machine):
        machine.start()
        machine.select_scheme(Scheme.SELF_EMPLOYED)
        success, _ = machine.select_sub_option(Scheme.SELF_EMPLOYED_OPTION_3)
        assert success is True
        assert machine.session.scheme == Scheme.SELF_EMPLOYED_OPTION_3
        assert machine.session.respondent.monthly_contribution == "300"
        assert machine.session.current_screen == Screen.CURRENT_BENEFITS
        assert SE_CHILD_ALLOWANCE in machine.available_benefits()

    def test_sub_option_rejects_non_option(self, machine):
        machine.start()
        machine.select_scheme(Scheme.SELF_EMPLOYED)
        success, _ = machine.select_sub_option(Scheme.MANDATORY_EMPLOYEE)
        assert success is False
        assert machine.session.scheme == Scheme.SELF_EMPLOYED

    def test_default_contribution_filled_for_employee(self, machine):
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        assert machine.session.respondent.monthly_contribution == "750"

    def test_default_contribution_keeps_entered_value(self, machine):
        machine.update_respondent(RespondentPatch(monthly_contribution="600"))
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        assert machine.session.respondent.monthly_contribution == "600"

    def test_voluntary_gets_fixed_rate_as_default(self, machine):
        machine.start()
        machine.select_scheme(Scheme.VOLUNTARY_CONTINUATION)
        assert machine.session.respondent.monthly_contribution == "432"

    def test_no_default_contribution_for_unregistered(self, machine):
        machine.start()
        machine.select_scheme(Scheme.NOT_REGISTERED)
        assert machine.session.respondent.monthly_contribution is None

    def test_navigation_count_increments(self, machine):
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        assert machine.session.navigation_count == 2


# =============================================================================
# TEST: USED BENEFITS
# =============================================================================

class TestUsedBenefits:

    def test_toggle_adds_then_removes(self, machine):
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)

        success, message = machine.toggle_used_benefit(UNEMPLOYMENT)
        assert success is True
        assert message.startswith("Added")
        assert machine.session.respondent.used_benefits == [UNEMPLOYMENT]

        success, message = machine.toggle_used_benefit(UNEMPLOYMENT)
        assert message.startswith("Removed")
        assert machine.session.respondent.used_benefits == []

    def test_toggle_twice_is_identity_with_order_kept(self, machine):
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        first, second = benefits_for(Scheme.MANDATORY_EMPLOYEE)[:2]
        machine.toggle_used_benefit(first)
        machine.toggle_used_benefit(second)

        machine.toggle_used_benefit(UNEMPLOYMENT)
        machine.toggle_used_benefit(UNEMPLOYMENT)

        assert machine.session.respondent.used_benefits == [first, second]

    def test_toggle_only_on_benefits_screen(self, machine):
        success, _ = machine.toggle_used_benefit(UNEMPLOYMENT)
        assert success is False
        assert machine.session.respondent.used_benefits == []


# =============================================================================
# TEST: BACK NAVIGATION
# =============================================================================

class TestGoBack:

    def test_no_back_from_home(self, machine):
        success, _ = machine.go_back()
        assert success is False
        assert machine.session.current_screen == Screen.HOME

    def test_back_from_benefits_to_options_for_self_employed(self):
        m = WizardStateMachine()
        m.start()
        m.select_scheme(Scheme.SELF_EMPLOYED)
        m.select_sub_option(Scheme.SELF_EMPLOYED_OPTION_1)
        m.go_back()
        assert m.session.current_screen == Screen.SCHEME_SUB_OPTIONS

    def test_back_from_benefits_to_selection(self, machine):
        machine.start()
        machine.select_scheme(Scheme.MANDATORY_EMPLOYEE)
        machine.go_back()
        assert machine.session.current_screen == Screen.SELECTION

    def test_back_from_suggestions_to_selection_for_unregistered(self, machine):
        machine.start()
        machine.select_scheme(Scheme.NOT_REGISTERED)
        machine.go_back()
        assert machine.session.current_screen == Screen.SELECTION

    def test_back_from_suggestions_to_form(self):
        m = at_suggestions_for_employee()
        m.go_back()
        assert m.session.current_screen == Screen.USER_INPUT

    def test_back_keeps_entered_data(self):
        m = at_suggestions_for_employee()
        m.go_back()
        m.go_back()
        m.go_back()
        assert m.session.current_screen == Screen.SELECTION
        assert m.session.scheme == Scheme.MANDATORY_EMPLOYEE
        assert m.session.respondent.age == "30"
        assert m.session.suggestions.other == "more coverage"

    def test_no_back_from_end(self):
        m = WizardStateMachine(Session(current_screen=Screen.END))
        success, _ = m.go_back()
        assert success is False


# =============================================================================
# TEST: CONTRIBUTION FORM GATE
# =============================================================================

class TestFormGate:

    def test_blocked_until_required_inputs_filled(self):
        m = at_user_input(Scheme.MANDATORY_EMPLOYEE)
        success, message = m.continue_to_suggestions()
        assert success is False
        assert "age" in message
        assert m.session.current_screen == Screen.USER_INPUT

    def test_passes_when_filled(self):
        m = at_user_input(Scheme.MANDATORY_EMPLOYEE)
        m.update_respondent(RespondentPatch(age="30", occupation="clerk", years_contributing="5"))
        success, _ = m.continue_to_suggestions()
        assert success is True
        assert m.session.current_screen == Screen.SUGGEST_BENEFITS

    def test_cleared_input_counts_as_missing(self):
        m = at_user_input(Scheme.MANDATORY_EMPLOYEE)
        m.update_respondent(RespondentPatch(age="30", occupation="clerk", years_contributing="5"))
        m.update_respondent(RespondentPatch(monthly_contribution="  "))
        assert m.missing_form_fields() == ["monthly_contribution"]

    def test_self_employed_needs_months(self):
        m = at_user_input(Scheme.SELF_EMPLOYED, Scheme.SELF_EMPLOYED_OPTION_2)
        m.update_respondent(RespondentPatch(age="50", occupation="farmer", years_contributing="2"))
        assert m.missing_form_fields() == ["months_contributing"]
        m.update_respondent(RespondentPatch(months_contributing="0"))
        assert m.missing_form_fields() == []

    def test_voluntary_needs_both_regimes(self):
        m = at_user_input(Scheme.VOLUNTARY_CONTINUATION)
        m.update_respondent(RespondentPatch(
            age="45", occupation="trader",
            years_section33="10", months_section33="2", monthly_section33="750",
        ))
        assert m.missing_form_fields() == ["years_section39", "months_section39"]

    def test_total_contribution(self):
        m = at_user_input(Scheme.MANDATORY_EMPLOYEE)
        m.update_respondent(RespondentPatch(years_contributing="5"))
        assert m.total_contribution() == 45000

    def test_patch_preserves_other_fields(self, machine):
        machine.update_respondent(RespondentPatch(age="30", occupation="clerk"))
        machine.update_respondent(RespondentPatch(age="31"))
        assert machine.session.respondent.age == "31"
        assert machine.session.respondent.occupation == "clerk"


# =============================================================================
# TEST: SUBMIT
# =============================================================================

class TestSubmit:

    @pytest.mark.asyncio
    async def test_success_moves_to_end(self):
        m = at_suggestions_for_employee()
        client = FakeClient()

        result = await m.submit(client)

        assert result.success is True
        assert m.session.current_screen == Screen.END
        assert m.session.submission_status == SubmissionStatus.SUCCEEDED
        assert client.calls == 1

    @pytest.mark.asyncio
    async def test_failure_stays_with_error(self):
        m = at_suggestions_for_employee()
        client = FakeClient(SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, "Failed to save feedback"))

        result = await m.submit(client)

        assert result.success is False
        assert m.session.current_screen == Screen.SUGGEST_BENEFITS
        assert m.session.submission_status == SubmissionStatus.FAILED
        assert m.session.submission_error == "Failed to save feedback"
        assert m.session.respondent.age == "30"

    @pytest.mark.asyncio
    async def test_retry_after_failure(self):
        m = at_suggestions_for_employee()
        await m.submit(FakeClient(SubmissionResult.failed(FailureKind.NETWORK_OR_SERVER_ERROR, "down")))

        result = await m.submit(FakeClient())

        assert result.success is True
        assert m.session.submission_error is None
        assert m.session.current_screen == Screen.END

    @pytest.mark.asyncio
    async def test_only_from_suggestions(self, machine):
        client = FakeClient()
        result = await machine.submit(client)
        assert result.success is False
        assert client.calls == 0
        assert machine.session.submission_status == SubmissionStatus.IDLE

    @pytest.mark.asyncio
    async def test_second_submit_rejected_while_in_flight(self):
        m = at_suggestions_for_employee()
        client = ReentrantClient(m)

        result = await m.submit(client)

        assert client.inner_result.success is False
        assert "already in progress" in client.inner_result.error
        assert client.calls == 1
        assert result.success is True
        assert m.session.current_screen == Screen.END

    @pytest.mark.asyncio
    async def test_late_result_discarded_after_navigation(self):
        m = at_suggestions_for_employee()
        client = NavigatingClient(m)

        await m.submit(client)

        assert m.session.current_screen == Screen.USER_INPUT
        assert m.session.submission_status == SubmissionStatus.IDLE

    @pytest.mark.asyncio
    async def test_client_exception_becomes_failure(self):
        m = at_suggestions_for_employee()

        result = await m.submit(ExplodingClient())

        assert result.success is False
        assert result.failure == FailureKind.NETWORK_OR_SERVER_ERROR
        assert m.session.submission_status == SubmissionStatus.FAILED
        assert m.session.current_screen == Screen.SUGGEST_BENEFITS

    @pytest.mark.asyncio
    async def test_end_to_end_with_mock_transport(self):
        sent = []

        def handler(request):
            sent.append(request)
            return httpx.Response(201, json={"success": True, "id": "abc"})

        m = at_suggestions_for_employee()
        client = FeedbackSubmissionClient(base_url="http://survey.test", transport=httpx.MockTransport(handler))

        result = await m.submit(client)

        assert result.record_id == "abc"
        assert m.session.current_screen == Screen.END
        body = json.loads(sent[0].content)
        assert body["sectionType"] == "33"
        assert body["userData"]["totalContribution"] == 45000


# =============================================================================
# TEST: RESTART
# =============================================================================

class TestRestart:

    @pytest.mark.asyncio
    async def test_restart_keeps_answers_by_default(self):
        m = at_suggestions_for_employee()
        await m.submit(FakeClient())

        success, _ = m.restart()

        assert success is True
        assert m.session.current_screen == Screen.HOME
        assert m.session.submission_status == SubmissionStatus.IDLE
        assert m.session.respondent.age == "30"

    @pytest.mark.asyncio
    async def test_restart_can_clear(self):
        m = at_suggestions_for_employee()
        await m.submit(FakeClient())

        m.restart(clear_data=True)

        assert m.session.current_screen == Screen.HOME
        assert m.session.scheme is None
        assert m.session.respondent.age is None
        assert m.session.suggestions.other == ""

    def test_restart_only_from_end(self, machine):
        machine.start()
        success, _ = machine.restart()
        assert success is False
        assert machine.session.current_screen == Screen.SELECTION
