from __future__ import annotations

from functools import partial

from dewey.config import ClientConfig
from dewey.decoders import decode_task
from dewey.models import Task
from dewey.operation import Operation, build_request
from dewey.verify import parse_response


def get_task(client: ClientConfig, task_uid: int) -> Operation[Task]:
    """
    Look up the full record of a task returned as a `SummarizedTask` by a mutating call.
    """
    return Operation(
        request=build_request(client, "GET", f"/tasks/{int(task_uid)}"),
        parse=partial(parse_response, decoder=decode_task),
    )
