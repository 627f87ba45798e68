# Copyright 2026 Pramod Kumar Voola
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

# -----------------------------------------------------------------------------
# CONTAINER SUMMARIZER
# -----------------------------------------------------------------------------
# Responsibility: Normalize raw Docker container records into Containers.
#
# - Id    -> first 12 characters (short ids are kept whole)
# - Names -> first entry without its leading '/', or "unknown"
# Output order follows input order.
# -----------------------------------------------------------------------------

from collections.abc import Iterable

from remdoc.domain.models import Container, RawContainer

SHORT_ID_LENGTH = 12
UNKNOWN_NAME = "unknown"


def short_id(raw_id: str) -> str:
    """First 12 characters of a container id; shorter ids come back unchanged."""
    if len(raw_id) <= SHORT_ID_LENGTH:
        return raw_id
    return raw_id[:SHORT_ID_LENGTH]


def container_name(names: list[str]) -> str:
    if not names:
        return UNKNOWN_NAME
    return names[0].removeprefix("/")


def summarize_container(raw: RawContainer) -> Container:
    return Container(
        id=short_id(raw.id),
        name=container_name(raw.names),
        image=raw.image,
        state=raw.state,
        status=raw.status,
    )


def summarize_containers(raws: Iterable[RawContainer]) -> list[Container]:
    return [summarize_container(raw) for raw in raws]
