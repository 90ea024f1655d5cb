"""HTML report formatter for scan results."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

from ....application.ports import RenderedReport
from ....domain.value_objects import Severity

if TYPE_CHECKING:
    from ....domain.entities import Finding, ScanResult


class HtmlReportFormatter:
    """Render a scan result into an email subject and HTML body."""

    SUBJECT_PREFIX = "Entra ID credentials expiring soon"

    def render(self, result: ScanResult) -> RenderedReport:
        """Render subject and body; directory-supplied text is escaped."""
        return RenderedReport(
            subject=self._format_subject(result),
            body=self._format_html_body(result),
        )

    def _format_subject(self, result: ScanResult) -> str:
        prefix = "[URGENT] " if result.urgent else ""
        return f"{prefix}{self.SUBJECT_PREFIX} ({result.count})"

    @staticmethod
    def _format_days(finding: Finding) -> str:
        if finding.days_left < 0:
            return f"expired {-finding.days_left} days ago"
        if finding.days_left == 0:
            return "expires today"
        return f"{finding.days_left} days"

    def _format_row(self, finding: Finding) -> str:
        severity = finding.severity
        name = escape(finding.application_name)
        credential_name = escape(finding.credential_name or finding.key_id[:8] or "-")
        expiry = finding.expires_at.strftime("%Y-%m-%d %H:%M UTC")
        return (
            f'<tr class="{severity}" style="color: {severity.color_hex if finding.is_urgent else "inherit"};">'
            f"<td>{finding.kind.marker}</td>"
            f"<td>{name}</td>"
            f"<td>{finding.kind.label}</td>"
            f"<td>{credential_name}</td>"
            f"<td>{severity.emoji} {self._format_days(finding)}</td>"
            f"<td>{expiry}</td>"
            f"<td>{escape(finding.application_id)}</td>"
            f'<td><a href="{escape(finding.portal_url)}" target="_blank">Manage</a></td>'
            "</tr>\n"
        )

    def _format_html_body(self, result: ScanResult) -> str:
        """Format HTML email body."""
        color = Severity.URGENT.color_hex if result.urgent else Severity.WARNING.color_hex
        rows = "".join(self._format_row(finding) for finding in result.findings)
        window = result.window

        return f"""<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<style>
body {{ font-family: Arial, sans-serif; margin: 20px; }}
.header {{ background-color: {color}; color: white; padding: 15px; border-radius: 5px; }}
.summary {{ background-color: #f8f9fa; padding: 15px; margin: 15px 0; border-radius: 5px; }}
table {{ border-collapse: collapse; width: 100%; margin: 15px 0; }}
th, td {{ border: 1px solid #ddd; padding: 8px; text-align: left; }}
th {{ background-color: #4CAF50; color: white; }}
tr.urgent {{ font-weight: bold; background-color: #f8d7da; }}
tr.warning {{ background-color: #fff3cd; }}
a {{ color: #0066cc; text-decoration: none; }}
.footer {{ margin-top: 20px; font-size: 12px; color: #6c757d; }}
</style>
</head>
<body>
<div class="header"><h1>Entra ID Credential Expiry Report</h1></div>
<div class="summary">
<h2>{escape(result.get_summary())}</h2>
<p>Applications scanned: {result.applications_scanned} | Applications affected: {result.affected_applications_count}</p>
<p>Urgent: {len(result.urgent)} | Warning: {len(result.warning)} | Expired: {result.expired_count}</p>
<p>Window: expiring within {window.threshold_days} days or expired within the last {window.grace_days} days</p>
</div>
<table>
<tr><th></th><th>Application</th><th>Type</th><th>Name</th><th>Days left</th><th>Expires</th><th>Application ID</th><th>Action</th></tr>
{rows}</table>
<div class="footer"><p>Entra ID Credential Expiry Mailer</p></div>
</body>
</html>"""
