from quoteclient.runner import main

raise SystemExit(main())
