"""CloudWatch adapters for the log and metric sink ports.

boto3 clients are synchronous, so each call runs in a worker thread via
``asyncio.to_thread``; the two sinks can then be awaited concurrently.
Client errors are re-raised as
:class:`~cspwarden.telemetry.errors.SinkDeliveryError`.

Usage
-----
>>> import boto3
>>> log_sink = CloudWatchLogSink(boto3.client("logs", region_name="us-east-1"))
>>> metric_sink = CloudWatchMetricSink(
...     boto3.client("cloudwatch", region_name="us-east-1")
... )

"""

from __future__ import annotations

import asyncio
import typing as typ

from botocore.exceptions import BotoCoreError, ClientError

from cspwarden.telemetry.errors import SinkDeliveryError

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from cspwarden.telemetry.sink import (
        LogDestination,
        LogEvent,
        MetricDatum,
        MetricDestination,
    )

__all__ = ["CloudWatchLogSink", "CloudWatchMetricSink"]


class CloudWatchLogSink:
    """Write log events with the CloudWatch Logs ``PutLogEvents`` call.

    Parameters
    ----------
    client
        boto3 ``logs`` client.

    """

    def __init__(self, client: typ.Any) -> None:  # noqa: ANN401
        """Wrap a CloudWatch Logs client."""
        self._client = client

    async def put_log_events(
        self,
        destination: LogDestination,
        events: cabc.Sequence[LogEvent],
    ) -> None:
        """Write *events* to the destination log group and stream."""
        log_events = [
            {"timestamp": event.timestamp_ms, "message": event.message}
            for event in events
        ]
        try:
            await asyncio.to_thread(
                self._client.put_log_events,
                logGroupName=destination.group_name,
                logStreamName=destination.stream_name,
                logEvents=log_events,
            )
        except (BotoCoreError, ClientError) as exc:
            raise SinkDeliveryError.log_delivery_failed(destination, exc) from exc


class CloudWatchMetricSink:
    """Publish data points with the CloudWatch ``PutMetricData`` call.

    Parameters
    ----------
    client
        boto3 ``cloudwatch`` client.

    """

    def __init__(self, client: typ.Any) -> None:  # noqa: ANN401
        """Wrap a CloudWatch client."""
        self._client = client

    async def put_metric_datum(
        self,
        destination: MetricDestination,
        datum: MetricDatum,
    ) -> None:
        """Publish *datum* under the destination namespace and name."""
        metric = {
            "MetricName": destination.metric_name,
            "Dimensions": [
                {"Name": dimension.name, "Value": dimension.value}
                for dimension in datum.dimensions
            ],
            "Value": datum.value,
            "Unit": datum.unit,
            "Timestamp": datum.timestamp,
        }
        try:
            await asyncio.to_thread(
                self._client.put_metric_data,
                Namespace=destination.namespace,
                MetricData=[metric],
            )
        except (BotoCoreError, ClientError) as exc:
            raise SinkDeliveryError.metric_delivery_failed(destination, exc) from exc
