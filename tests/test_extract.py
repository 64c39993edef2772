from __future__ import annotations

import textwrap
import unittest

from kube_images.errors import ManifestParseError
from kube_images.extract import (
    Extracted,
    Fatal,
    Skipped,
    extract_document,
    images_from_args,
)
from kube_images.validators import OPERATOR, POD_TEMPLATE, TYPE_META, get_validator


def _document(text: str) -> bytes:
    return textwrap.dedent(text).encode("utf-8")


DEPLOYMENT = _document(
    """
    apiVersion: apps/v1
    kind: Deployment
    metadata:
      name: web
    spec:
      replicas: 2
      template:
        metadata:
          labels:
            app: web
        spec:
          containers:
            - name: web
              image: nginx:1.0
              args:
                - --proxy-image=gcr.io/proj/proxy:1.0
                - --listen=:8080
                - --log-level=debug
            - name: sidecar
              image: busybox:1.2
    """
)


class OperatorKindTests(unittest.TestCase):
    def test_prometheus_yields_base_image_and_version(self) -> None:
        result = extract_document(
            _document(
                """
                apiVersion: monitoring.coreos.com/v1
                kind: Prometheus
                spec:
                  baseImage: quay.io/prometheus/prometheus
                  version: v2.0.0
                """
            )
        )

        self.assertEqual(result, Extracted(["quay.io/prometheus/prometheus:v2.0.0"]))

    def test_alertmanager_yields_base_image_and_version(self) -> None:
        result = extract_document(
            _document(
                """
                kind: Alertmanager
                spec:
                  baseImage: quay.io/prometheus/alertmanager
                  version: v0.15.0
                """
            )
        )

        self.assertEqual(
            result, Extracted(["quay.io/prometheus/alertmanager:v0.15.0"])
        )

    def test_malformed_prometheus_is_fatal(self) -> None:
        result = extract_document(
            _document(
                """
                kind: Prometheus
                spec:
                  baseImage: [not, a, string]
                  version: v2.0.0
                """
            )
        )

        self.assertIsInstance(result, Fatal)
        self.assertIsInstance(result.error, ManifestParseError)
        self.assertIn("prometheus", str(result.error))

    def test_non_string_alertmanager_version_is_fatal(self) -> None:
        result = extract_document(
            _document(
                """
                kind: Alertmanager
                spec:
                  baseImage: quay.io/prometheus/alertmanager
                  version: 0.15
                """
            )
        )

        self.assertIsInstance(result, Fatal)


class PodTemplateTests(unittest.TestCase):
    def test_deployment_containers_and_arguments_in_order(self) -> None:
        result = extract_document(DEPLOYMENT)

        self.assertEqual(
            result,
            Extracted(["nginx:1.0", "gcr.io/proj/proxy:1.0", "busybox:1.2"]),
        )

    def test_init_containers_come_first(self) -> None:
        result = extract_document(
            _document(
                """
                kind: StatefulSet
                spec:
                  template:
                    spec:
                      containers:
                        - name: db
                          image: postgres:15
                      initContainers:
                        - name: migrate
                          image: example/migrate:3
                """
            )
        )

        self.assertEqual(result, Extracted(["example/migrate:3", "postgres:15"]))

    def test_cronjob_nested_template(self) -> None:
        result = extract_document(
            _document(
                """
                apiVersion: batch/v1
                kind: CronJob
                spec:
                  schedule: "0 * * * *"
                  jobTemplate:
                    spec:
                      template:
                        spec:
                          containers:
                            - name: backup
                              image: example/backup:2.1
                """
            )
        )

        self.assertEqual(result, Extracted(["example/backup:2.1"]))

    def test_pod_spec(self) -> None:
        result = extract_document(
            _document(
                """
                apiVersion: v1
                kind: Pod
                spec:
                  containers:
                    - name: debug
                      image: busybox:1.36
                """
            )
        )

        self.assertEqual(result, Extracted(["busybox:1.36"]))

    def test_resource_without_pod_template_has_no_images(self) -> None:
        result = extract_document(
            _document(
                """
                apiVersion: v1
                kind: Service
                spec:
                  ports:
                    - port: 80
                """
            )
        )

        self.assertEqual(result, Extracted([]))

    def test_containers_of_wrong_shape_are_skipped(self) -> None:
        result = extract_document(
            _document(
                """
                kind: Deployment
                spec:
                  template:
                    spec:
                      containers: nginx:1.0
                """
            )
        )

        self.assertIsInstance(result, Skipped)


class KindDetectionTests(unittest.TestCase):
    def test_invalid_yaml_is_skipped(self) -> None:
        self.assertIsInstance(extract_document(b"kind: [unterminated\n"), Skipped)

    def test_non_mapping_document_is_skipped(self) -> None:
        self.assertIsInstance(extract_document(b"- just\n- a list\n"), Skipped)

    def test_non_string_kind_is_skipped(self) -> None:
        self.assertIsInstance(extract_document(b"kind: 42\n"), Skipped)

    def test_empty_document_has_no_images(self) -> None:
        self.assertEqual(extract_document(b""), Extracted([]))

    def test_commented_separator_keeps_first_document(self) -> None:
        data = (
            b"kind: Pod\nspec:\n  containers:\n    - image: nginx:1.0\n"
            b"--- # second\nkind: ConfigMap\n"
        )

        self.assertEqual(extract_document(data), Extracted(["nginx:1.0"]))

    def test_trailing_bare_separator_keeps_document(self) -> None:
        data = b"kind: Pod\nspec:\n  containers:\n    - image: nginx:1.0\n---"

        self.assertEqual(extract_document(data), Extracted(["nginx:1.0"]))


class ImagesFromArgsTests(unittest.TestCase):
    def test_only_tagged_values_are_extracted(self) -> None:
        args = [
            "--proxy-image=gcr.io/proj/proxy:1.0",
            "--flag=value",
            "--flag=:value",
            "--verbose",
        ]

        self.assertEqual(images_from_args(args), ["gcr.io/proj/proxy:1.0"])

    def test_value_is_cut_at_second_equals_sign(self) -> None:
        self.assertEqual(images_from_args(["--env=KEY=img:1"]), ["KEY"])

    def test_argument_without_equals_is_ignored(self) -> None:
        self.assertEqual(images_from_args(["localhost:8080"]), [])

    def test_missing_args(self) -> None:
        self.assertEqual(images_from_args(None), [])


class BundledSchemaTests(unittest.TestCase):
    def test_bundled_schemas_are_valid(self) -> None:
        for name in (TYPE_META, OPERATOR, POD_TEMPLATE):
            with self.subTest(schema=name):
                self.assertIn("$schema", get_validator(name).schema)


if __name__ == "__main__":  # pragma: no cover - convenience
    unittest.main()
