# -*- coding: utf-8 -*-

import os

from selenium import webdriver
from selenium.webdriver.chrome.service import Service

from ytexport_core.pathing import find_resource


def launch_browser(url: str, headless: bool = False) -> webdriver.Chrome:
    """Launch Chrome tuned for scraping speed/stability and open url."""
    opts = webdriver.ChromeOptions()
    if headless:
        opts.add_argument("--headless=new")
        opts.add_argument("--window-size=1280,2000")
    opts.add_argument("--disable-gpu")
    opts.add_argument("--no-sandbox")
    opts.add_argument("--disable-dev-shm-usage")
    opts.add_argument("--disable-extensions")
    opts.add_argument("--start-maximized")
    opts.add_argument("--log-level=3")
    opts.add_argument("--mute-audio")
    opts.set_capability("pageLoadStrategy", "eager")
    opts.add_experimental_option("excludeSwitches", ["enable-automation", "enable-logging"])
    opts.add_experimental_option("useAutomationExtension", False)
    opts.add_experimental_option("prefs", {
        "profile.default_content_setting_values.notifications": 2,
    })

    # a bundled driver wins; otherwise Selenium Manager resolves one
    driver_path = find_resource(
        os.path.join("assets", "chromedriver.exe"),
        os.path.join("assets", "chromedriver"),
    )
    if driver_path:
        service = Service(executable_path=driver_path, log_output=os.devnull)
    else:
        service = Service(log_output=os.devnull)
    driver = webdriver.Chrome(service=service, options=opts)
    driver.get(url)

    dismiss_overlays(driver)
    return driver


def dismiss_overlays(driver) -> None:
    """Best-effort: close the consent dialog and hide sticky banners."""
    try:
        driver.execute_script("""
            try {
              document.querySelectorAll('ytd-consent-bump-v2-lightbox, tp-yt-iron-overlay-backdrop')
                .forEach(el => el.remove());
              ['.cookie', '.banner', 'ytd-popup-container tp-yt-paper-dialog'].forEach(sel =>
                document.querySelectorAll(sel).forEach(el => {
                  const pos = getComputedStyle(el).position;
                  if (pos === 'fixed' || pos === 'sticky') el.style.display = 'none';
                }));
            } catch (e) {}
        """)
    except Exception:
        pass
