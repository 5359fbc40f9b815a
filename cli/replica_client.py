"""HTTP client for communicating with a replica service."""

import time
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

import httpx

from common.logging_config import get_logger
from cli.config import Config
from cli.constants import DEFAULT_EXPORT_FILENAME, GREEN, IMPORT_FILE_EXTENSIONS, RESET
from cli.utils import format_qso_line
from replica.datetimes import to_local_input_value

logger = get_logger(__name__)


class ReplicaClient:
    """HTTP client for the replica API with retry logic and error handling."""

    def __init__(self, config: Config):
        """
        Initialize replica client.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.session = httpx.Client(
            base_url=config.get_base_url(),
            timeout=config.get_timeout()
        )
        self.request_id = None
        logger.info(f"Initialized ReplicaClient [base_url={config.get_base_url()}]")

    def _request_with_retry(
        self,
        method: str,
        endpoint: str,
        max_retries: Optional[int] = None,
        **kwargs
    ) -> httpx.Response:
        """
        Make HTTP request with retry logic on 5xx errors and network failures.

        Args:
            method: HTTP method (GET, POST, DELETE, etc.)
            endpoint: API endpoint path
            max_retries: Max retry attempts (uses config default if None)
            **kwargs: Additional arguments to pass to httpx request

        Returns:
            HTTP response object

        Raises:
            ConnectionError: If max retries exceeded or connection fails
        """
        retry_config = self.config.get_retry_config()
        max_retries = max_retries if max_retries is not None else retry_config['max_retries']
        backoff = retry_config['retry_backoff_multiplier']

        last_exception = None

        self.request_id = str(uuid.uuid4())
        kwargs.setdefault('headers', {})['X-Request-ID'] = self.request_id

        logger.debug(
            f"Making request: {method} {endpoint} [request_id={self.request_id}]"
        )

        for attempt in range(max_retries + 1):
            try:
                response = self.session.request(method, endpoint, **kwargs)

                logger.debug(
                    f"Response received: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                )

                if 400 <= response.status_code < 500:
                    logger.warning(
                        f"Client error: {method} {endpoint} status={response.status_code} [request_id={self.request_id}]"
                    )
                    return response

                if response.status_code >= 500 and attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Server error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} status={response.status_code}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue

                return response

            except (httpx.ConnectError, httpx.TimeoutException) as e:
                last_exception = e
                if attempt < max_retries:
                    delay = backoff ** attempt
                    logger.warning(
                        f"Network error (attempt {attempt + 1}/{max_retries + 1}): "
                        f"{method} {endpoint} error={type(e).__name__}, retrying in {delay}s [request_id={self.request_id}]"
                    )
                    time.sleep(delay)
                    continue
                logger.error(
                    f"Network error (max retries exceeded): {method} {endpoint} error={e} [request_id={self.request_id}]"
                )

        if isinstance(last_exception, httpx.TimeoutException):
            raise ConnectionError("Request timed out. Replica may be overloaded.")
        if last_exception is not None:
            raise ConnectionError("Cannot connect to replica. Is it running?")
        raise ConnectionError("Max retries exceeded")

    def _format_error(self, response: httpx.Response) -> str:
        """
        Map HTTP errors to user-friendly messages.

        Args:
            response: HTTP response object

        Returns:
            User-friendly error message
        """
        try:
            error_data = response.json()
            detail = error_data.get('detail', 'Unknown error')
            code = error_data.get('code', 'UNKNOWN')
        except ValueError:
            detail = response.text if response.text else 'Unknown error'
            code = 'UNKNOWN'

        error_messages = {
            'INVALID_QSO': 'Callsign and date/time are required.',
            'QSO_NOT_FOUND': 'QSO not found in the log.',
            'UNSUPPORTED_IMPORT': 'Only CSV files are supported.',
        }

        if code in error_messages:
            return error_messages[code]

        status_messages = {
            400: 'Bad request',
            404: 'Not found',
            422: 'Invalid request',
            500: 'Server error',
            503: 'Service unavailable',
        }

        message = status_messages.get(response.status_code, str(detail))
        return f"{message} (Code: {code})" if code != 'UNKNOWN' else message

    def _call(self, action: str, method: str, endpoint: str, **kwargs) -> tuple[Optional[httpx.Response], Optional[str]]:
        """
        Perform a request and translate transport failures into a message.

        Returns:
            (response, None) on any HTTP response, (None, message) on failure
        """
        try:
            return self._request_with_retry(method, endpoint, **kwargs), None
        except ConnectionError as e:
            logger.error(f"Connection error during {action}: {e}")
            return None, f"Error: {e}"

    def log_qso(self, form: dict) -> str:
        """
        Save a QSO through the replica's form endpoint.

        Args:
            form: Form fields with camelCase keys; 'dt' defaults to now

        Returns:
            Success or error message
        """
        body = dict(form)
        body.setdefault('dt', to_local_input_value(datetime.now()))
        logger.info(f"Logging QSO: {body.get('callsign')}")

        response, error = self._call('log', 'POST', '/qsos', json=body)
        if error:
            return error

        if response.status_code == 201:
            qso = response.json()
            return f"{GREEN}Saved{RESET} {qso['callsign']} [{qso['id']}]"
        return f"Save failed: {self._format_error(response)}"

    def list_qsos(self, query: str = "") -> str:
        """
        List QSOs newest first.

        Args:
            query: Optional search text

        Returns:
            Formatted listing
        """
        response, error = self._call('list', 'GET', '/qsos', params={'q': query})
        if error:
            return error

        if response.status_code != 200:
            return f"List failed: {self._format_error(response)}"

        data = response.json()
        qsos = data.get('qsos', [])
        if not qsos:
            return "No QSOs yet."

        pending = data.get('pending_delete_id')
        lines = [format_qso_line(qso, pending) for qso in qsos]
        header = f"{len(qsos)} QSO(s)"
        if data.get('editing_id'):
            header += f" (editing {data['editing_id']})"
        return header + "\n" + "\n".join(lines)

    def begin_edit(self, qso_id: str) -> str:
        """
        Enter edit mode for a QSO.

        Args:
            qso_id: Id of the QSO to edit

        Returns:
            Current values and instructions, or error message
        """
        response, error = self._call('edit', 'POST', f'/qsos/{qso_id}/edit')
        if error:
            return error

        if response.status_code == 200:
            qso = response.json()
            return (
                f"Editing {qso['callsign']}:\n{format_qso_line(qso)}\n"
                "Use 'log <CALL> key=value ...' to save changes, or 'cancel'."
            )
        return f"Edit failed: {self._format_error(response)}"

    def cancel_edit(self) -> str:
        response, error = self._call('cancel', 'POST', '/qsos/edit/cancel')
        if error:
            return error
        if response.status_code == 204:
            return "Edit cancelled."
        return f"Cancel failed: {self._format_error(response)}"

    def delete_qso(self, qso_id: str) -> str:
        """
        Request deletion of a QSO (two-step).

        Args:
            qso_id: Id of the QSO to delete

        Returns:
            Confirmation prompt or result message
        """
        response, error = self._call('delete', 'DELETE', f'/qsos/{qso_id}')
        if error:
            return error

        if response.status_code != 200:
            return f"Delete failed: {self._format_error(response)}"

        if response.json().get('status') == 'deleted':
            return f"Deleted QSO {qso_id}."
        return f"Run 'delete {qso_id}' again to confirm."

    def import_file(self, file_path: str) -> str:
        """
        Import QSOs from a local CSV file.

        Args:
            file_path: Path to the CSV file

        Returns:
            Import summary or error message
        """
        path = Path(file_path).expanduser()
        if not path.name.lower().endswith(IMPORT_FILE_EXTENSIONS):
            return "Only CSV files are supported."
        if not path.is_file():
            return f"Error: File not found: {file_path}"

        try:
            text = path.read_text(encoding='utf-8-sig')
        except (OSError, UnicodeDecodeError) as e:
            return f"Import failed: {e}"

        logger.info(f"Importing {path.name} ({len(text)} characters)")
        response, error = self._call('import', 'POST', '/import', json={'text': text, 'filename': path.name})
        if error:
            return error

        if response.status_code == 200:
            return response.json()['message']
        return f"Import failed: {self._format_error(response)}"

    def export_file(self, output_path: Optional[str] = None) -> str:
        """
        Download the CSV export to a local file.

        Args:
            output_path: Destination (default: hamlog.csv in the current directory)

        Returns:
            Success or error message
        """
        response, error = self._call('export', 'GET', '/export')
        if error:
            return error

        if response.status_code != 200:
            return f"Export failed: {self._format_error(response)}"

        target = Path(output_path or DEFAULT_EXPORT_FILENAME).expanduser()
        if target.is_dir():
            target = target / DEFAULT_EXPORT_FILENAME

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(response.text, encoding='utf-8')
        except OSError as e:
            return f"Export failed: {e}"

        rows = max(len(response.text.split("\n")) - 1, 0)
        return f"Exported {rows} QSO(s) to {target}"
