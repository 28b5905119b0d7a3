"""NVD CVE JSON 1.0 feed records and loading."""