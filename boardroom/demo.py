"""CLI demonstration of executive message routing and decision fan-out."""
from __future__ import annotations

import asyncio
from typing import NoReturn

from boardroom.core.models import CompanyContext, DecisionType, ExecutiveRole
from boardroom.logs import setup_logging
from boardroom.orchestration.orchestrator import create_orchestrator


async def main() -> None:
    setup_logging("INFO")
    context = CompanyContext(
        name="Demo Co.",
        industry="Retail",
        goals=("Grow online sales", "Keep six months of runway"),
    )
    orchestrator = create_orchestrator(context, auto_routing=False)
    cfo = orchestrator.get_executive(ExecutiveRole.CFO)
    print(f"Registered {[agent.role for agent in orchestrator.active_executives()]}")

    await orchestrator.send_message(
        cfo.create_message(
            ExecutiveRole.CMO,
            "Q3 campaign budget",
            "Can we keep paid social under 20k this quarter?",
            requires_response=True,
        )
    )
    steps = await orchestrator.process_all()
    print(f"Drained queue in {steps} step(s)")
    for message in orchestrator.processed_messages.values():
        print(f"  {message.sender} -> {message.recipient}: {message.subject} [{message.status.value}]")

    delivered = await orchestrator.broadcast_message(
        ExecutiveRole.COO,
        "Office closure",
        "The office is closed on Friday.",
    )
    print(f"Broadcast reached {len(delivered)} executive(s)")

    decision = cfo.create_decision(
        DecisionType.APPROVAL,
        "Paid social budget",
        "Approved 20k for Q3",
        "Report ROI monthly.",
        impacted_roles=[ExecutiveRole.CMO, ExecutiveRole.COO],
        action_required=True,
    )
    notifications = await orchestrator.record_decision(decision)
    await orchestrator.process_all()
    print(f"Decision notified {len(notifications)} executive(s)")

    batch = await orchestrator.generate_all_reports()
    print(f"Generated {len(batch.decisions)} report(s), {len(batch.errors)} failure(s)")


def run() -> NoReturn:
    asyncio.run(main())


if __name__ == "__main__":
    run()
