"""CVSS version 3.0 base, temporal and environmental metrics, vectors and scores."""