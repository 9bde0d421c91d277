"""Ping automation loop."""

import signal
import sys
import threading
from typing import Optional
from loguru import logger
from .accounts import AccountManager
from .client import ApiClient
from .models import AutomationState, Config
from .nodes import NodeManager
from .utils import format_timestamp, parse_claims, truncate, UNKNOWN


class PingAutomation:
    """Health-gated loop that pings every node of every account.

    Processing is strictly sequential. `stop()` sets the cancellation event,
    which wakes any pending wait; a request already in flight is allowed to
    finish and the loop exits at its next check.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        api_client: Optional[ApiClient] = None,
        account_manager: Optional[AccountManager] = None,
        node_manager: Optional[NodeManager] = None,
    ):
        self.config = config or Config()
        self.api_client = api_client or ApiClient(
            self.config.base_url,
            timeout=self.config.request_timeout,
            max_retries=self.config.max_retries,
            retry_delay=self.config.retry_delay,
        )
        self.account_manager = account_manager or AccountManager(self.config.accounts_file)
        self.node_manager = node_manager or NodeManager(self.api_client)
        self.state = AutomationState.STOPPED
        self._stop_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self.state is AutomationState.RUNNING

    def install_signal_handlers(self) -> None:
        """Stop and exit cleanly on SIGINT/SIGTERM. Main thread only."""
        signal.signal(signal.SIGINT, self._handle_shutdown)
        signal.signal(signal.SIGTERM, self._handle_shutdown)

    def _handle_shutdown(self, signum, frame):
        self.stop()
        sys.exit(0)

    def _wait(self, seconds: float) -> None:
        self._stop_event.wait(seconds)

    def perform_health_check(self) -> bool:
        logger.info("Performing health check...")
        if not self.api_client.health_check():
            logger.error("Service is not healthy, skipping ping cycle")
            return False
        logger.success("Health check passed")
        return True

    def process_account(self, token: str) -> None:
        """Ping every node of one account and log each outcome."""
        claims = parse_claims(token)
        length = self.config.truncate_length
        account_info = (
            f"Account: {truncate(token, length)} | "
            f"[UserID: {(claims and claims.user_id) or UNKNOWN} | "
            f"Issued: {format_timestamp(claims.iat if claims else None)} | "
            f"Expires: {format_timestamp(claims.exp if claims else None)}]"
        )

        for node in self.node_manager.get_nodes(token):
            is_success = self.node_manager.ping_node(token, node.pub_key)
            message = (
                f"{account_info} | Node: {truncate(node.pub_key, length)} "
                f"Ping: {'Success' if is_success else 'Failed'}"
            )
            if is_success:
                logger.success(message)
            else:
                logger.error(message)

    def run_cycle(self) -> None:
        """Process all accounts once. One account failing never stops the rest."""
        for token in self.account_manager.get_accounts():
            try:
                self.process_account(token)
            except Exception as e:
                logger.error(f"Error processing account {truncate(token, self.config.truncate_length)}: {e}")

    def start(self, interval_minutes: Optional[float] = None) -> None:
        """Run the loop until stopped. Blocks the calling thread."""
        if self.is_running:
            logger.warning("Automation is already running")
            return
        if self._stop_event.is_set():
            logger.warning("Automation has been stopped; create a new instance to run again")
            return

        if not self.account_manager.load_accounts():
            logger.error("Failed to load accounts, stopping automation")
            return

        interval = self.config.interval_minutes if interval_minutes is None else interval_minutes
        self.state = AutomationState.RUNNING
        logger.info(f"Starting ping automation with {interval:g} minute interval")

        try:
            while self.is_running:
                if not self.perform_health_check():
                    self._wait(self.config.unhealthy_delay)
                    continue

                self.run_cycle()
                self._wait(interval * 60)
        except Exception:
            self.stop()
            raise

    def stop(self) -> None:
        if not self.is_running:
            return
        self.state = AutomationState.STOPPED
        self._stop_event.set()
        logger.warning("Stopping ping automation")
