"""
Connector construction by task.

Maps an InferenceTask onto the connector class that speaks it, so callers
holding configuration (the CLI, an embedding service) do not branch on task.
"""

from tableqa.connector.base_connector import BaseConnector
from tableqa.connector.httpx_transport import HttpxTransport
from tableqa.connector.summarization import SummarizationConnector
from tableqa.connector.table_qa import TableQAConnector
from tableqa.connector.transport import BaseTransport
from tableqa.models.enums import InferenceTask

CONNECTORS: dict[InferenceTask, type[BaseConnector]] = {
    InferenceTask.TABLE_QUESTION_ANSWERING: TableQAConnector,
    InferenceTask.SUMMARIZATION: SummarizationConnector,
}


def create_connector(
    task: InferenceTask,
    endpoint: str,
    timeout: float = 30.0,
    transport: BaseTransport | None = None,
) -> BaseConnector:
    """
    Build the connector for ``task``.

    Args:
        task: Backend task
        endpoint: URL to POST to
        timeout: Round-trip bound in seconds
        transport: Transport to use (default: a new HttpxTransport)

    Returns:
        Connector instance; closing it closes the transport
    """
    connector_class = CONNECTORS[InferenceTask(task)]
    return connector_class(
        endpoint=endpoint,
        transport=transport or HttpxTransport(),
        timeout=timeout,
    )
