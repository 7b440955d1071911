"""Role-based seed scenarios for synthetic reflections."""

from __future__ import annotations

from reflection_eval.common.types import Scenario, Task


def _scenario(
    role: str,
    wins: list[str],
    drains: list[str],
    future_focus: list[str],
    tasks: list[tuple[str, str]],
) -> Scenario:
    return Scenario(
        role=role,
        wins=tuple(wins),
        drains=tuple(drains),
        future_focus=tuple(future_focus),
        tasks=tuple(Task(task_text=text, category=category) for text, category in tasks),
    )


SCENARIOS: tuple[Scenario, ...] = (
    _scenario(
        "product designer",
        ["Finalized the onboarding flow", "Polished the empty state illustrations"],
        ["Context switching between design reviews"],
        ["Prepare the handoff for engineering"],
        [
            ("Finalize onboarding flow", "creating"),
            ("Polish empty state illustrations", "creating"),
            ("Design review with mobile team", "collaborating"),
            ("Send handoff notes to engineering", "communicating"),
        ],
    ),
    _scenario(
        "frontend engineer",
        ["Shipped the landing page update", "Fixed the auth redirect bug"],
        ["Back-to-back standups"],
        ["Refactor the profile settings module"],
        [
            ("Ship landing page update", "creating"),
            ("Fix auth redirect bug", "creating"),
            ("Daily standup meeting", "collaborating"),
            ("Review PR for analytics events", "collaborating"),
        ],
    ),
    _scenario(
        "marketing manager",
        ["Drafted the Q2 campaign brief", "Locked the influencer shortlist"],
        ["A long vendor negotiation call"],
        ["Get legal approval for ad copy"],
        [
            ("Draft Q2 campaign brief", "creating"),
            ("Finalize influencer shortlist", "organizing"),
            ("Vendor negotiation call", "collaborating"),
            ("Email legal about ad copy review", "communicating"),
        ],
    ),
    _scenario(
        "operations lead",
        ["Updated the weekly staffing plan", "Cleared the backlog of approvals"],
        ["Chasing missing timesheets"],
        ["Automate the approval workflow"],
        [
            ("Update weekly staffing plan", "organizing"),
            ("Approve pending time off requests", "organizing"),
            ("Follow up on missing timesheets", "communicating"),
            ("Sync with HR on scheduling gaps", "collaborating"),
        ],
    ),
    _scenario(
        "customer success",
        ["Onboarded the new enterprise account", "Resolved two critical tickets"],
        ["Late-night escalation with support"],
        ["Draft the quarterly health report"],
        [
            ("Onboard new enterprise account", "collaborating"),
            ("Resolve critical support tickets", "creating"),
            ("Escalation call with support", "collaborating"),
            ("Outline quarterly health report", "creating"),
        ],
    ),
    _scenario(
        "data analyst",
        ["Built the revenue cohort dashboard", "Validated the churn model inputs"],
        ["Rework due to inconsistent source data"],
        ["Share insights with finance"],
        [
            ("Build revenue cohort dashboard", "creating"),
            ("Validate churn model inputs", "creating"),
            ("Document data inconsistencies", "organizing"),
            ("Send insights summary to finance", "communicating"),
        ],
    ),
    _scenario(
        "project manager",
        ["Aligned the roadmap with stakeholders", "Closed sprint scope"],
        ["Too many ad-hoc status checks"],
        ["Prepare sprint kickoff agenda"],
        [
            ("Roadmap alignment meeting", "collaborating"),
            ("Close sprint scope", "organizing"),
            ("Respond to status check emails", "communicating"),
            ("Draft sprint kickoff agenda", "organizing"),
        ],
    ),
    _scenario(
        "nurse lead",
        ["Completed patient discharge summaries", "Updated medication charts before rounds"],
        ["Extended wound care rounds"],
        ["Prepare training notes for new staff"],
        [
            ("Complete patient discharge summaries", "creating"),
            ("Update medication charts", "organizing"),
            ("Wound care rounds", "creating"),
            ("Brief new staff on protocol changes", "communicating"),
        ],
    ),
    _scenario(
        "research lead",
        ["Synthesized interview insights", "Drafted the methodology section"],
        ["Long IRB compliance review"],
        ["Plan the next participant wave"],
        [
            ("Synthesize interview insights", "creating"),
            ("Draft methodology section", "creating"),
            ("IRB compliance review meeting", "collaborating"),
            ("Plan next participant wave", "organizing"),
        ],
    ),
    _scenario(
        "founder",
        ["Closed a pilot customer", "Updated the investor deck"],
        ["Travel logistics for the demo day"],
        ["Finalize the pricing page"],
        [
            ("Close pilot customer", "collaborating"),
            ("Update investor deck", "creating"),
            ("Book demo day travel", "organizing"),
            ("Iterate pricing page copy", "creating"),
        ],
    ),
    _scenario(
        "HR partner",
        ["Finalized the onboarding checklist", "Completed two performance reviews"],
        ["Backlog of compliance paperwork"],
        ["Schedule manager training session"],
        [
            ("Finalize onboarding checklist", "organizing"),
            ("Complete performance reviews", "collaborating"),
            ("Process compliance paperwork", "organizing"),
            ("Schedule manager training session", "organizing"),
        ],
    ),
    _scenario(
        "sales lead",
        ["Ran two successful product demos", "Closed the renewal with Redwood"],
        ["Chasing late-stage pricing approvals"],
        ["Update the pipeline forecast"],
        [
            ("Run product demos", "collaborating"),
            ("Close Redwood renewal", "collaborating"),
            ("Request pricing approvals", "communicating"),
            ("Update pipeline forecast", "organizing"),
        ],
    ),
    _scenario(
        "operations analyst",
        ["Mapped the supply chain bottlenecks", "Cleaned the vendor list"],
        ["Spreadsheet cleanup took too long"],
        ["Automate vendor scoring"],
        [
            ("Map supply chain bottlenecks", "creating"),
            ("Clean vendor list", "organizing"),
            ("Audit procurement spreadsheet", "organizing"),
            ("Draft vendor scoring framework", "creating"),
        ],
    ),
    _scenario(
        "content strategist",
        ["Outlined the February editorial calendar", "Published the FAQ update"],
        ["Multiple last-minute edits"],
        ["Coordinate the webinar copy"],
        [
            ("Outline February editorial calendar", "organizing"),
            ("Publish FAQ update", "creating"),
            ("Handle last-minute edits", "communicating"),
            ("Coordinate webinar copy", "collaborating"),
        ],
    ),
    _scenario(
        "engineering manager",
        ["Unblocked the infra rollout", "Coached two ICs through review feedback"],
        ["Incident response during lunch"],
        ["Plan the next architecture review"],
        [
            ("Unblock infra rollout", "collaborating"),
            ("Coach ICs on review feedback", "collaborating"),
            ("Handle incident response", "creating"),
            ("Plan architecture review", "organizing"),
        ],
    ),
)
