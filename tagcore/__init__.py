"""
tagcore is the common core of a family of statistical taggers and
labelers working over dependency trees.  Every component shares one
lifecycle and one feature extraction mechanism.

Layers
~~~~~~
Working our way up:

* tree layer (tagcore.deptree, tagcore.conll): sentences as
  dependency trees with an artificial root at position 0, and their
  CoNLL-X representation

* learning layer (tagcore.learning): declarative feature templates,
  the engine that expands them into sparse string feature vectors,
  training spaces and the statistical models trained from them

* component layer (tagcore.component): the mode lifecycle (lexica,
  train, decode, bootstrap, develop), the model archive, and the
  concrete components built on top of them (a part-of-speech tagger
  and a dependency labeler)

* metrics (tagcore.metrics): attachment and labeling accuracy

::

             cmd                                [command line]
              |
          component  ---->  metrics             [component layer]
           |      |
           v      v
      learning   deptree <- conll               [learning/tree layers]

A component is built in exactly one mode and stays in it.  The mode
decides which of its parallel arrays (feature templates, training
spaces, models) exist at all, so a decoding component simply has no
way to add training instances.
"""
