"""Cluster Secret Sync FastAPI Application.

The service:
- Watches secrets created by a cluster provisioner (Crossplane GKECluster)
- Extracts the cluster endpoint, CA and name from them
- Registers the cluster with Argo CD through a labelled cluster secret

The HTTP side only serves health checks; the work happens on the watcher
thread started in the lifespan.
"""

from __future__ import annotations

import threading
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from kubernetes import client

from shared.config import ClusterSyncSettings, get_settings
from shared.observability import get_logger, setup_logging

from .api import health
from .services import (
    CredentialExtractor,
    CredentialRecordBuilder,
    DryRunRecordWriter,
    KubernetesRecordWriter,
    RecordWriter,
    SecretEventHandler,
    SecretWatcher,
    create_core_api,
)

settings = get_settings()
setup_logging(log_level=settings.log_level, log_format=settings.log_format)
logger = get_logger(__name__)


def build_writer(settings: ClusterSyncSettings, core_api: client.CoreV1Api) -> RecordWriter:
    """Pick the writer: Kubernetes when enabled, dry-run logging otherwise."""
    if settings.writer_enabled:
        return KubernetesRecordWriter(core_api)
    return DryRunRecordWriter()


def build_handler(settings: ClusterSyncSettings, writer: RecordWriter) -> SecretEventHandler:
    return SecretEventHandler(
        provisioner_kind=settings.provisioner_kind,
        extractor=CredentialExtractor(settings.missing_kubeconfig_policy),
        builder=CredentialRecordBuilder(
            local_namespace=settings.local_namespace,
            target_namespace=settings.target_namespace,
            cluster_name_prefix=settings.cluster_name_prefix,
        ),
        writer=writer,
    )


def build_watcher(settings: ClusterSyncSettings, core_api: client.CoreV1Api) -> SecretWatcher:
    """Wire watcher, handler, extractor, builder and writer together."""
    handler = build_handler(settings, build_writer(settings, core_api))
    return SecretWatcher(
        core_api,
        handler,
        timeout_seconds=settings.kubernetes.watch_timeout_seconds,
    )


def _run_watcher(watcher: SecretWatcher) -> None:
    try:
        watcher.run()
    except Exception:
        logger.exception("Secret watcher terminated")
        raise


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Connects to the Kubernetes API (failure aborts startup), then runs the
    secret watcher on a daemon thread until shutdown.
    """
    logger.info(
        "Starting Cluster Secret Sync service",
        version=settings.app_version,
        local_namespace=settings.local_namespace,
        target_namespace=settings.target_namespace,
        provisioner_kind=settings.provisioner_kind,
        writer_enabled=settings.writer_enabled,
    )

    core_api = create_core_api(settings.kubernetes)
    watcher = build_watcher(settings, core_api)
    app.state.watcher = watcher

    thread = threading.Thread(
        target=_run_watcher,
        args=(watcher,),
        name="secret-watcher",
        daemon=True,
    )
    thread.start()
    app.state.watcher_thread = thread

    logger.info("Cluster Secret Sync service started successfully")

    yield

    # Shutdown
    logger.info("Shutting down Cluster Secret Sync service")
    watcher.stop()
    logger.info("Cluster Secret Sync service shutdown complete")


app = FastAPI(
    title="Cluster Secret Sync Service",
    description="Registers provisioner-created clusters with Argo CD",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.include_router(health.router, tags=["Health"])


@app.get("/")
async def root():
    """Root endpoint with service info."""
    return {
        "service": "cluster-secret-sync",
        "version": settings.app_version,
        "docs": "/docs",
    }


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.value.lower(),
    )
