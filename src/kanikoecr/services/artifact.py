"""Artifact metadata file describing pushed images."""

import json
import os
import tempfile
from typing import Any, Dict

from kanikoecr.constants import ARTIFACT_KIND, FILE_MODE
from kanikoecr.models import Artifact


class ArtifactService:
    """Writes the docker/v1 artifact document consumed by later pipeline steps."""

    def __init__(self, logger, filesystem_service):
        self.logger = logger
        self.filesystem_service = filesystem_service

    def build_document(self, artifact: Artifact, digest: str) -> Dict[str, Any]:
        images = [
            {"image": f"{artifact.repo}:{tag}", "digest": digest}
            for tag in artifact.tags
        ]
        return {
            "kind": ARTIFACT_KIND,
            "data": {
                "registryType": artifact.registry_type,
                "registryUrl": artifact.registry,
                "images": images,
            },
        }

    def write(self, artifact: Artifact, digest: str) -> bool:
        path = artifact.artifact_file
        document = self.build_document(artifact, digest.strip())
        directory = os.path.dirname(os.path.abspath(path))
        try:
            os.makedirs(directory, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(prefix="artifact-", suffix=".json", dir=directory)
        except OSError as exc:
            self.logger.warning("Could not write artifact file '%s': %s", path, exc)
            return False

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as file_obj:
                json.dump(document, file_obj, indent=2)
                file_obj.write("\n")
            os.replace(temp_path, path)
        except OSError as exc:
            self.logger.warning("Could not write artifact file '%s': %s", path, exc)
            try:
                os.remove(temp_path)
            except OSError:
                pass
            return False

        self.filesystem_service.set_permissions(path, FILE_MODE)
        self.logger.info("Artifact file written to %s", path)
        return True
