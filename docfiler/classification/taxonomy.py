"""Fixed folder taxonomy every account's year folder follows."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Subfolder:
    name: str
    description: str


@dataclass(frozen=True)
class Category:
    name: str
    subfolders: tuple[Subfolder, ...]


TAXONOMY: tuple[Category, ...] = (
    Category(
        "01 - Tax Returns & Extensions",
        (
            Subfolder("Drafts", "early versions before filing"),
            Subfolder(
                "Final Filed Return",
                "signed and submitted returns (1040, 1065, 1120, 1041, etc.)",
            ),
            Subfolder("E-File Confirmations", "IRS/state acknowledgments"),
            Subfolder("Federal Extension", "extension requests (Forms 4868, 7004)"),
            Subfolder("State Extensions", "state equivalents of federal extensions"),
            Subfolder("Estimated Tax Vouchers", "quarterly estimated payments (Q1-Q4)"),
            Subfolder("Payment Confirmations", "proof of tax payments"),
        ),
    ),
    Category(
        "02 - Source Documents",
        (
            Subfolder("W-2s", "employee wage statements"),
            Subfolder(
                "1099s",
                "contractor, investment, or retirement income "
                "(INT, DIV, MISC, NEC, K, R, B, G)",
            ),
            Subfolder("K-1s", "pass-through entity income"),
            Subfolder("Mortgage-1098", "mortgage interest"),
            Subfolder(
                "Brokerage - Investment Statements", "stocks, bonds, crypto CSVs"
            ),
            Subfolder("Foreign Assets", "offshore accounts (FBAR / 8938)"),
            Subfolder("Education - HSA - Medical Docs", "1098-T, 1098-E, HSA forms"),
            Subfolder("Charitable Contributions", "receipts and letters"),
            Subfolder("Other Supporting Docs", "anything else relevant"),
        ),
    ),
    Category(
        "03 - Tax Planning & Projections",
        (
            Subfolder("Withholding Reviews", "withholding analyses"),
            Subfolder("IRA - Roth Comparisons", "retirement account comparisons"),
            Subfolder("Optimization Memos", "tax optimization memos"),
            Subfolder(
                "Compensation Strategies",
                "shareholder compensation or dividend strategies (business)",
            ),
            Subfolder(
                "Trust DNI Projections",
                "DNI projections and distribution strategies (trust)",
            ),
        ),
    ),
    Category(
        "04 - IRS & State Correspondence",
        (
            Subfolder("Notices", "audit letters, penalties, CP2000, etc."),
            Subfolder("Responses", "prepared replies"),
            Subfolder(
                "Audit Materials",
                "supporting docs, filing proofs, payment proofs",
            ),
            Subfolder("Beneficiary Letters", "letters to trust beneficiaries"),
        ),
    ),
    Category(
        "05 - Engagement & Authority Documents",
        (
            Subfolder("Engagement Letters", "signed scope agreements"),
            Subfolder("E-File Authorization", "Form 8879 / Fiduciary 8879"),
            Subfolder("Power of Attorney", "Forms 2848, 8821, 56 for trusts"),
            Subfolder("Secretary of State Filings", "business entity filings"),
        ),
    ),
    Category(
        "06 - Spreadsheets & Excel Files",
        (
            Subfolder("Client Excel Summaries", "client-provided summaries"),
            Subfolder("Sale of Asset Logs", "asset sale records"),
            Subfolder("Capital Account Tracking", "partner capital accounts"),
            Subfolder("Inventory Valuation", "inventory workbooks"),
            Subfolder("Basis Calculations", "cost basis workbooks"),
            Subfolder("Trust Ledger", "trust accounting ledgers"),
        ),
    ),
    Category(
        "07 - Admin & Internal Files",
        (
            Subfolder("Prep Checklists", "preparation checklists"),
            Subfolder("Internal Review Notes", "internal review notes and comments"),
            Subfolder("Workpapers", "workpapers for Schedules A/B/D/M-1/M-2"),
            Subfolder("Depreciation Schedules", "depreciation schedules"),
            Subfolder("Trustee Discussions", "trustee discussion notes"),
            Subfolder("Beneficiary Distribution Logs", "trust distribution logs"),
        ),
    ),
)

CATCH_ALL_FOLDER = TAXONOMY[-1].name


def render_taxonomy(taxonomy: tuple[Category, ...] = TAXONOMY) -> str:
    """Render the taxonomy as an indented outline for the prompt."""
    lines: list[str] = []
    for category in taxonomy:
        lines.append(category.name)
        lines.extend(
            f"  - {subfolder.name}: {subfolder.description}"
            for subfolder in category.subfolders
        )
        lines.append("")
    return "\n".join(lines).rstrip()
