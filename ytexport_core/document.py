# -*- coding: utf-8 -*-

"""
Page access for the exporter.

The loader and extractor only talk to the page through DocumentAccessor and
ItemHandle, so tests can hand them in-memory fakes. SeleniumDocument is the
real thing, backed by a running Chrome driver.
"""

from typing import List, Optional, Protocol

from selenium.webdriver.common.by import By
from selenium.common.exceptions import (
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC

from ytexport_core.config import CONTAINER_SELECTOR, ITEM_SELECTOR, CONTAINER_WAIT_S


class ItemHandle(Protocol):
    def text_of(self, selector: str) -> Optional[str]:
        """textContent of the first descendant matching selector, None if absent."""
        ...


class DocumentAccessor(Protocol):
    def title(self) -> str: ...

    def reveal_container(self) -> bool:
        """Scroll the comments region into view. False if it isn't on the page."""
        ...

    def current_item_count(self) -> int: ...

    def item_at(self, index: int) -> ItemHandle: ...

    def items(self) -> List[ItemHandle]: ...

    def scroll_to_bottom(self) -> None: ...


# =========================
# Selenium backed
# =========================

class SeleniumItem:
    """One ytd-comment-thread-renderer element."""

    def __init__(self, element):
        self.element = element

    def text_of(self, selector: str) -> Optional[str]:
        try:
            found = self.element.find_elements(By.CSS_SELECTOR, selector)
            if not found:
                return None
            # textContent, not .text: collapsed replies and off-screen nodes still count
            return found[0].get_attribute("textContent") or ""
        except StaleElementReferenceException:
            return None


class SeleniumDocument:
    def __init__(
        self,
        driver,
        container_selector: str = CONTAINER_SELECTOR,
        item_selector: str = ITEM_SELECTOR,
        container_wait: float = CONTAINER_WAIT_S,
    ):
        self.driver = driver
        self.container_selector = container_selector
        self.item_selector = item_selector
        self.container_wait = container_wait

    def title(self) -> str:
        return self.driver.title or ""

    def reveal_container(self) -> bool:
        try:
            container = WebDriverWait(self.driver, self.container_wait).until(
                EC.presence_of_element_located((By.CSS_SELECTOR, self.container_selector))
            )
        except TimeoutException:
            return False
        self.driver.execute_script(
            "arguments[0].scrollIntoView({behavior: 'smooth'});", container
        )
        return True

    def _elements(self) -> list:
        return self.driver.find_elements(By.CSS_SELECTOR, self.item_selector)

    def current_item_count(self) -> int:
        return len(self._elements())

    def item_at(self, index: int) -> SeleniumItem:
        return SeleniumItem(self._elements()[index])

    def items(self) -> List[SeleniumItem]:
        return [SeleniumItem(el) for el in self._elements()]

    def scroll_to_bottom(self) -> None:
        self.driver.execute_script("window.scrollTo(0, document.documentElement.scrollHeight);")

    def current_url(self) -> str:
        try:
            return self.driver.current_url or ""
        except WebDriverException:
            return ""
