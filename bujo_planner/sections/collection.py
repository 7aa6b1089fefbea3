"""Numbered free-form collection pages."""

from typing import List

from ..canvas import PlannerContext
from ..layout import TITLE_FONT_SIZE
from ..navigation import nav_items
from ..refs import CollectionRef, PageType


def generate_collection_pages(ctx: PlannerContext, count: int) -> List[CollectionRef]:
    labels = [item.label for item in nav_items(PageType.COLLECTION, ctx.flags)]
    refs = []

    for number in range(1, count + 1):
        page, page_index = ctx.new_page()
        title = f"Collection {number}"
        content_top = ctx.draw_header(page, labels, title, TITLE_FONT_SIZE - 1)
        ctx.draw_page_background(page, ctx.collection_page_style, content_top, ctx.dims.bottom)
        refs.append(CollectionRef(label=title, page_index=page_index, number=number))

    return refs
