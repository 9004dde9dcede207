from __future__ import annotations

import logging

from check_graphite.core.config import CheckConfig
from check_graphite.integrations.graphite import GraphiteClient, build_render_url
from check_graphite.services.aggregation import aggregate_body
from check_graphite.services.thresholds import CheckResult, evaluate, infer_direction


logger = logging.getLogger(__name__)


class GraphiteCheck:
    """Runs one render query and classifies the aggregate against the configured bounds."""

    def __init__(self, config: CheckConfig, *, client: GraphiteClient | None = None):
        self._config = config
        self._client = client or GraphiteClient()

    @property
    def url(self) -> str:
        return build_render_url(
            self._config.base_url,
            self._config.target,
            self._config.from_minutes,
            self._config.scale,
        )

    def run(self) -> CheckResult:
        config = self._config
        body = self._client.fetch(self.url)
        total = aggregate_body(body)
        logger.debug(
            "Evaluating %s against warning=%s critical=%s (%s)",
            total,
            config.warning,
            config.critical,
            infer_direction(config.warning, config.critical).value,
        )
        verdict = evaluate(total, config.warning, config.critical)
        return CheckResult(name=config.name, verdict=verdict, total=total)
