"""
Feature extraction and learning for tagcore components.

* `tagcore.learning.template`: declarative feature templates
* `tagcore.learning.extraction`: expanding templates into feature vectors
* `tagcore.learning.space`: training spaces (instances waiting to be
  learned from)
* `tagcore.learning.model`: the statistical models trained from them
"""
