from taskflow.main import main

raise SystemExit(main())
