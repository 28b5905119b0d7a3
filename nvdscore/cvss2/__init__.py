"""CVSS version 2 metrics, vectors and scores."""