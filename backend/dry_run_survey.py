"""
Benefit Survey - Dry-Run Script

Drives the wizard through every scheme path against the real FastAPI app
(in-process, via httpx.ASGITransport) to prove:
1. Each scheme routes through the right screens
2. Local validation blocks incomplete submissions without a request
3. Complete submissions are stored with the computed total
4. A failed submission keeps the respondent's answers

Run with: python dry_run_survey.py
Uses DATABASE_URL (defaults to a local SQLite file).
"""
import asyncio
import os
import sys

# Add benefit_survey to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import httpx

from benefit_survey.database import SessionLocal, init_db
from benefit_survey.main import app
from benefit_survey.models.db_models import Scheme
from benefit_survey.models.wizard import RespondentPatch, Screen, SuggestionsPatch
from benefit_survey.services.catalog import benefits_for
from benefit_survey.services.contribution import format_amount
from benefit_survey.services.feedback_service import FeedbackService
from benefit_survey.services.submission import FailureKind, FeedbackSubmissionClient
from benefit_survey.services.wizard import WizardStateMachine


def print_header(step: int, title: str):
    """Print a formatted step header."""
    print(f"\n{'='*70}")
    print(f"STEP {step}: {title}")
    print('='*70)


def print_success(msg: str):
    """Print success message."""
    print(f"  [OK] {msg}")


def print_fail(msg: str):
    """Print failure message."""
    print(f"  [FAIL] {msg}")


def print_info(msg: str):
    """Print info message."""
    print(f"  [INFO] {msg}")


def make_client() -> FeedbackSubmissionClient:
    return FeedbackSubmissionClient(base_url="http://dry-run", transport=httpx.ASGITransport(app=app))


def check(condition: bool, ok_msg: str, fail_msg: str) -> bool:
    if condition:
        print_success(ok_msg)
    else:
        print_fail(fail_msg)
    return condition


def verify_record(record_id: str, scheme: Scheme, expected_total) -> bool:
    db = SessionLocal()
    try:
        record = FeedbackService(db).get_feedback(record_id)
        if record is None:
            print_fail(f"Record {record_id} not found")
            return False
        print_info(f"Stored record {record.id} at {record.created_at}")
        ok = check(record.section_type == scheme, f"Scheme stored as {scheme.value}", f"Scheme stored as {record.section_type}")
        total = record.user_data.get("totalContribution")
        if expected_total is not None:
            ok &= check(total == expected_total, f"Total contribution {format_amount(total)}", f"Total contribution was {total}")
        return ok
    finally:
        db.close()


# =============================================================================
# STEP 1: MANDATORY EMPLOYEE
# =============================================================================

async def step1_employee() -> bool:
    print_header(1, "MANDATORY EMPLOYEE (33)")
    wizard = WizardStateMachine()
    wizard.start()
    wizard.select_scheme(Scheme.MANDATORY_EMPLOYEE)
    print_info(f"Benefits shown: {len(wizard.available_benefits())}")
    wizard.toggle_used_benefit(benefits_for(Scheme.MANDATORY_EMPLOYEE)[0])
    wizard.continue_to_user_input()

    ok, message = wizard.continue_to_suggestions()
    if not check(not ok, f"Empty form blocked: {message}", "Empty form was accepted"):
        return False

    wizard.update_respondent(RespondentPatch(age="30", occupation="clerk", years_contributing="5"))
    wizard.continue_to_suggestions()
    wizard.update_suggestions(SuggestionsPatch(other="more coverage"))

    result = await wizard.submit(make_client())
    if not check(result.success and wizard.session.current_screen == Screen.END, "Reached END", f"Submit failed: {result.error}"):
        return False
    return verify_record(result.record_id, Scheme.MANDATORY_EMPLOYEE, 45000)


# =============================================================================
# STEP 2: VOLUNTARY CONTINUATION
# =============================================================================

async def step2_voluntary() -> bool:
    print_header(2, "VOLUNTARY CONTINUATION (39)")
    wizard = WizardStateMachine()
    wizard.start()
    wizard.select_scheme(Scheme.VOLUNTARY_CONTINUATION)
    wizard.continue_to_user_input()
    wizard.update_respondent(RespondentPatch(
        age="45", occupation="trader",
        years_section33="10", months_section33="2", monthly_section33="750",
        years_section39="3", months_section39="0",
    ))
    wizard.continue_to_suggestions()
    wizard.update_suggestions(SuggestionsPatch(healthcare=True))

    expected = wizard.total_contribution()
    print_info(f"Dual-regime total: {format_amount(expected)}")
    result = await wizard.submit(make_client())
    if not check(result.success, "Submitted", f"Submit failed: {result.error}"):
        return False
    return verify_record(result.record_id, Scheme.VOLUNTARY_CONTINUATION, expected)


# =============================================================================
# STEP 3: SELF-EMPLOYED OPTION 3
# =============================================================================

async def step3_self_employed() -> bool:
    print_header(3, "SELF-EMPLOYED OPTION 3 (40-3)")
    wizard = WizardStateMachine()
    wizard.start()
    wizard.select_scheme(Scheme.SELF_EMPLOYED)
    if not check(wizard.session.current_screen == Screen.SCHEME_SUB_OPTIONS, "Routed to option screen", "Option screen skipped"):
        return False
    wizard.select_sub_option(Scheme.SELF_EMPLOYED_OPTION_3)
    print_info(f"Monthly rate set to {wizard.session.respondent.monthly_contribution}")
    wizard.continue_to_user_input()
    wizard.update_respondent(RespondentPatch(age="52", occupation="farmer", years_contributing="2", months_contributing="0"))
    wizard.continue_to_suggestions()
    wizard.update_suggestions(SuggestionsPatch(retirement=True, user_idea="bigger lump sum"))

    result = await wizard.submit(make_client())
    if not check(result.success, "Submitted", f"Submit failed: {result.error}"):
        return False
    return verify_record(result.record_id, Scheme.SELF_EMPLOYED_OPTION_3, 7200)


# =============================================================================
# STEP 4: NOT REGISTERED
# =============================================================================

async def step4_not_registered() -> bool:
    print_header(4, "NOT REGISTERED")
    wizard = WizardStateMachine()
    wizard.start()
    wizard.select_scheme(Scheme.NOT_REGISTERED)
    if not check(wizard.session.current_screen == Screen.SUGGEST_BENEFITS, "Skipped to suggestions", "Did not skip to suggestions"):
        return False

    result = await wizard.submit(make_client())
    if not check(result.failure == FailureKind.MISSING_REQUIRED_FIELDS, f"Blank suggestions blocked: {result.error}", "Blank suggestions were sent"):
        return False

    wizard.update_suggestions(SuggestionsPatch(child_support=True))
    result = await wizard.submit(make_client())
    if not check(result.success, "Submitted", f"Submit failed: {result.error}"):
        return False
    return verify_record(result.record_id, Scheme.NOT_REGISTERED, None)


# =============================================================================
# STEP 5: NETWORK FAILURE
# =============================================================================

async def step5_network_failure() -> bool:
    print_header(5, "NETWORK FAILURE KEEPS ANSWERS")
    wizard = WizardStateMachine()
    wizard.start()
    wizard.select_scheme(Scheme.NOT_REGISTERED)
    wizard.update_suggestions(SuggestionsPatch(other="dental care"))

    unreachable = FeedbackSubmissionClient(base_url="http://127.0.0.1:9", timeout=2.0)
    result = await wizard.submit(unreachable)
    return check(
        not result.success and wizard.session.suggestions.other == "dental care",
        f"Failure reported ({result.failure.value if result.failure else None}), answers kept",
        "Answers lost or submission unexpectedly succeeded",
    )


async def run_all() -> bool:
    steps = [step1_employee, step2_voluntary, step3_self_employed, step4_not_registered, step5_network_failure]
    results = []
    for step in steps:
        results.append(await step())
    return all(results)


def main():
    """Run the full dry-run."""
    print("\n" + "="*70)
    print("BENEFIT SURVEY - DRY-RUN")
    print("="*70)
    print("This script walks every scheme path through the live app.")
    print("="*70)

    try:
        init_db()
        success = asyncio.run(run_all())

        print("\n" + "="*70)
        print("DRY-RUN COMPLETE" if success else "DRY-RUN FINISHED WITH FAILURES")
        print("="*70)
        return success

    except Exception as e:
        print(f"\n[ERROR] Dry-run failed: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
