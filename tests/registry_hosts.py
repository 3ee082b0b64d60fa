"""Registry hostnames shared by the hostname and helper tests."""

GCR_HOSTS = [
    "gcr.io",
    "us.gcr.io",
    "eu.gcr.io",
    "asia.gcr.io",
    "b.gcr.io",
    "bucket.gcr.io",
    "appengine.gcr.io",
    "gcr.kubernetes.io",
    "beta.gcr.io",
]

OTHER_HOSTS = ["docker.io", "otherrepo.com"]
