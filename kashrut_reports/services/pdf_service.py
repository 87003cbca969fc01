import os
import logging

from jinja2 import Environment, FileSystemLoader, select_autoescape
from weasyprint import HTML, CSS

from .report_builder import ReportDocument

logger = logging.getLogger(__name__)

TEMPLATE_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")


class PDFService:
    """Renders a laid-out ReportDocument to PDF bytes, one <section class="page"> per page."""

    def __init__(self, template_dir: str = TEMPLATE_DIR):
        self.template_dir = template_dir
        if not os.path.isabs(template_dir):
            self.template_dir = os.path.join(os.getcwd(), template_dir)

        self.jinja_env = Environment(
            loader=FileSystemLoader(self.template_dir),
            autoescape=select_autoescape(["html"]),
        )

    def render_html(self, document: ReportDocument, title: str = "Inspection Report") -> str:
        template = self.jinja_env.get_template("report_layout.html")
        return template.render(document=document, title=title)

    def render(self, document: ReportDocument, title: str = "Inspection Report") -> bytes:
        try:
            html_out = self.render_html(document, title=title)

            stylesheets = []
            style_path = os.path.join(self.template_dir, "style.css")
            if os.path.exists(style_path):
                stylesheets.append(CSS(filename=style_path))

            return HTML(string=html_out, base_url=self.template_dir).write_pdf(stylesheets=stylesheets)
        except Exception as e:
            logger.error(f"❌ Error generating PDF: {e}")
            raise
