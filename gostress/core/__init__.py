"""gostress core — event decoding, aggregation and the go test event source."""
