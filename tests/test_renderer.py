"""Tests renderer HTML + schémas ContentBlock (alias image/imageLink)."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from portfolio.carousel import Carousel
from portfolio.models import BlockType, ContentBlock, Profile, Section
from portfolio.renderer import render_block, render_page, render_text
from portfolio.view import Document


class TestContentBlockSchema:
    def test_legacy_keys_accepted(self):
        b = ContentBlock.model_validate({"type": "context", "content": "x", "image": ["i1"], "imageLink": ["l1"]})
        assert b.images == ["i1"]
        assert b.image_links == ["l1"]
        assert b.type == BlockType.CONTEXT

    def test_canonical_output_keys(self):
        doc = ContentBlock(content="x", images=["i1"], image_links=[""], enable_glass_effect=True).to_document()
        assert doc == {"type": "title", "content": "x", "images": ["i1"], "imageLinks": [""], "enableGlassEffect": True}

    def test_has_payload(self):
        assert not ContentBlock(content="  ").has_payload()
        assert ContentBlock(images=["a"]).has_payload()
        assert render_block(ContentBlock(content="  ")) == ""


class TestRender:
    def test_title_duration_in_parentheses(self):
        html = render_text(ContentBlock(type="title", content="Projects", duration="2024"))
        assert html.startswith("<h2")
        assert "(2024)" in html

    def test_context_duration_after_bullet(self):
        html = render_text(ContentBlock(type="context", content="Role", duration="2 yrs"))
        assert html.startswith("<p")
        assert "• 2 yrs" in html

    def test_text_escaped(self):
        assert "<script>" not in render_text(ContentBlock(content="<script>x</script>"))

    def test_block_glass_overrides_section(self):
        assert 'class="block glass"' in render_block(ContentBlock(content="a"), section_glass=True)
        assert 'class="block"' in render_block(ContentBlock(content="a", enable_glass_effect=False), section_glass=True)

    def test_images_only_block(self):
        html = render_block(ContentBlock(images=["data:image/png;base64,AA"]))
        assert "carousel-image" in html
        assert "<h2" not in html

    def test_open_lightbox_rendered_at_body_root(self):
        doc = Document()
        c = Carousel(["data:image/png;base64,AA", "data:image/png;base64,BB"], document=doc)
        c.click_image()
        page = render_page(Profile(name="Me", sections=[Section(title="S", blocks=[ContentBlock(content="x")])]), doc)
        # Après la fermeture du conteneur principal, pas dans une section
        assert page.index('class="lightbox-backdrop"') > page.index("\n</div>\n")
        assert 'style="overflow:hidden"' in page
